"""Tests for :mod:`imagegen.aiservices.provideroutput`."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from imagegen.aiservices.provideroutput import (
    ImageReference,
    KeyedOutput,
    PlainUrl,
    UrlSequence,
    decode_provider_output,
    to_image_reference,
)
from imagegen.errors import InvalidImageError, UnexpectedOutputError


def test_decode_tags_list_as_sequence() -> None:
    assert decode_provider_output(["http://x/a.png", "http://x/b.png"]) == UrlSequence(
        ("http://x/a.png", "http://x/b.png")
    )


def test_decode_tags_string_as_plain_url() -> None:
    assert decode_provider_output("http://x/img.png") == PlainUrl("http://x/img.png")


def test_decode_tags_mapping_preserving_order() -> None:
    output = decode_provider_output({"seed": 1, "image": "http://x/img.png"})

    assert output == KeyedOutput((("seed", 1), ("image", "http://x/img.png")))


def test_decode_consumes_generators() -> None:
    output = decode_provider_output(url for url in ["http://x/img.png"])

    assert output == UrlSequence(("http://x/img.png",))


@pytest.mark.parametrize("raw", [None, 42, 3.5, b"http://x/img.png", object()])
def test_decode_rejects_unknown_shapes(raw) -> None:
    with pytest.raises(UnexpectedOutputError) as excinfo:
        decode_provider_output(raw)

    assert excinfo.value.message == "Unexpected response format from model"
    assert excinfo.value.status_code == 500


def test_sequence_yields_first_element() -> None:
    reference = to_image_reference(decode_provider_output(["http://x/img.png", "http://x/other.png"]))

    assert reference == ImageReference(url="http://x/img.png")


def test_mapping_prefers_image_field() -> None:
    reference = to_image_reference(decode_provider_output({"output": "http://x/a.png", "image": "http://x/b.png"}))

    assert reference.url == "http://x/b.png"


def test_mapping_without_image_field_takes_first_value() -> None:
    reference = to_image_reference(decode_provider_output({"output": "http://x/a.png", "thumb": "http://x/t.png"}))

    assert reference.url == "http://x/a.png"


def test_mapping_with_empty_image_field_takes_first_value() -> None:
    reference = to_image_reference(decode_provider_output({"url": "http://x/a.png", "image": ""}))

    assert reference.url == "http://x/a.png"


@pytest.mark.parametrize(
    "raw",
    [
        [],
        "",
        {},
        "ftp://x/img.png",
        ["/relative/img.png"],
        [None],
        {"image": 7},
        {"seed": 42, "other": "http://x/img.png"},
    ],
)
def test_unusable_candidates_are_invalid_images(raw) -> None:
    with pytest.raises(InvalidImageError) as excinfo:
        to_image_reference(decode_provider_output(raw))

    assert excinfo.value.message == "Invalid image URL generated"
