"""Decoding of raw provider output into a single image reference.

Hosted models disagree on what they return: a list of URLs, a bare URL, or
a mapping that holds the URL under some key. :func:`decode_provider_output`
tags the raw value as one of three variants and :func:`to_image_reference`
maps every variant onto one validated :class:`ImageReference`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Mapping, Optional, Sequence, Tuple, Union

from ..errors import InvalidImageError, UnexpectedOutputError


@dataclass(frozen=True)
class UrlSequence:
    items: Tuple[Any, ...]


@dataclass(frozen=True)
class PlainUrl:
    value: str


@dataclass(frozen=True)
class KeyedOutput:
    # Pairs in provider order; the fallback rule below depends on it.
    fields: Tuple[Tuple[str, Any], ...]


ProviderOutput = Union[UrlSequence, PlainUrl, KeyedOutput]


@dataclass(frozen=True)
class ImageReference:
    url: str


def decode_provider_output(raw: Any) -> ProviderOutput:
    """Tag ``raw`` as one of the known output shapes.

    Raises:
        UnexpectedOutputError: ``raw`` is none of sequence, string or mapping.
    """
    if isinstance(raw, str):
        return PlainUrl(raw)
    if isinstance(raw, Mapping):
        return KeyedOutput(tuple((str(key), value) for key, value in raw.items()))
    if isinstance(raw, (bytes, bytearray)):
        raise UnexpectedOutputError()
    if isinstance(raw, Sequence):
        return UrlSequence(tuple(raw))
    if isinstance(raw, Iterator):
        # streaming models hand back a generator of outputs
        return UrlSequence(tuple(raw))
    raise UnexpectedOutputError()


def _candidate(output: ProviderOutput) -> Optional[Any]:
    if isinstance(output, UrlSequence):
        return output.items[0] if output.items else None
    if isinstance(output, PlainUrl):
        return output.value
    if isinstance(output, KeyedOutput):
        fields = dict(output.fields)
        if fields.get("image"):
            return fields["image"]
        # Order-dependent: whatever the provider listed first wins. Known to be
        # fragile for multi-field outputs but kept for compatibility.
        return output.fields[0][1] if output.fields else None
    raise UnexpectedOutputError()


def to_image_reference(output: ProviderOutput) -> ImageReference:
    """Extract the image URL from ``output`` and validate it.

    Raises:
        InvalidImageError: the extracted value is not a string starting with ``http``.
    """
    candidate = _candidate(output)
    if not isinstance(candidate, str) or not candidate.startswith("http"):
        raise InvalidImageError()
    return ImageReference(url=candidate)
