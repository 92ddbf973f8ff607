"""Server-rendered generator page and the state behind it."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from html import escape
from textwrap import dedent
from typing import Any, Dict, List, Optional

from .catalog import DEFAULT_MODEL, MODEL_CATALOG, ModelSpec, get_model_spec
from .service import RelayTransport

logger = logging.getLogger(__name__)

_FALLBACK_ERROR = "Failed to generate image"


@dataclass
class GeneratorView:
    """Per-render UI state of the generator page.

    ``submit`` walks idle -> loading -> success | error and always ends with
    ``is_loading`` cleared.
    """

    prompt: str = ""
    model: str = DEFAULT_MODEL.id
    image_url: Optional[str] = None
    is_loading: bool = False
    error: Optional[str] = None
    show_details: bool = False
    used_model: Optional[str] = None
    used_params: Dict[str, Any] = field(default_factory=dict)

    @property
    def model_spec(self) -> ModelSpec:
        return get_model_spec(self.model)

    @property
    def status(self) -> str:
        if self.is_loading:
            return "loading"
        if self.error:
            return "error"
        if self.image_url:
            return "success"
        return "idle"

    def build_payload(self) -> Dict[str, Any]:
        spec = self.model_spec
        return {"model": spec.id, **spec.build_input(self.prompt)}

    def submit(self, send: RelayTransport) -> None:
        self.is_loading = True
        self.error = None
        self.image_url = None
        self.used_model = None
        self.used_params = {}

        payload = self.build_payload()
        try:
            reply = send(payload)
            if not reply.ok:
                self.error = reply.body.get("error") or _FALLBACK_ERROR
            elif not reply.body.get("imageUrl"):
                self.error = "No image URL received"
            else:
                self.image_url = reply.body["imageUrl"]
                self.used_model = payload["model"]
                self.used_params = {k: v for k, v in payload.items() if k != "model"}
        except Exception as exc:
            logger.exception("Relay request failed")
            self.error = str(exc) or _FALLBACK_ERROR
        finally:
            self.is_loading = False

        if self.error:
            logger.info("Generation ended with error: %s", self.error)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def render(self) -> str:
        return _PAGE.format(
            model_options=self._render_model_options(),
            prompt=escape(self.prompt),
            button_disabled=" disabled" if self.is_loading else "",
            button_label="Generating..." if self.is_loading else "Generate Image",
            loading_hidden="" if self.is_loading else " hidden",
            error=self._render_error(),
            result=self._render_result(),
        )

    def _render_model_options(self) -> str:
        selected_id = self.model_spec.id
        options: List[str] = []
        for spec in MODEL_CATALOG:
            selected = " selected" if spec.id == selected_id else ""
            options.append(
                f'<option value="{escape(spec.id)}"{selected}>{escape(spec.name)}</option>'
            )
        return "\n".join(options)

    def _render_error(self) -> str:
        if not self.error:
            return ""
        return f'<div class="error" role="alert">{escape(self.error)}</div>'

    def _render_result(self) -> str:
        if not self.image_url:
            return ""
        spec = get_model_spec(self.used_model)
        params = json.dumps(self.used_params, indent=2, sort_keys=True)
        details_open = " open" if self.show_details else ""
        return dedent(
            f"""
            <div class="result">
              <div class="preview" style="aspect-ratio: {spec.css_aspect_ratio}">
                <img src="{escape(self.image_url)}" alt="Generated image">
              </div>
              <details class="details"{details_open}>
                <summary>Show details</summary>
                <dl>
                  <dt>Model</dt>
                  <dd><code>{escape(self.used_model or "")}</code></dd>
                  <dt>Parameters</dt>
                  <dd><pre>{escape(params)}</pre></dd>
                </dl>
              </details>
            </div>
            """
        ).strip()


_PAGE = dedent(
    """
    <!DOCTYPE html>
    <html lang="en">
    <head>
      <meta charset="utf-8">
      <meta name="viewport" content="width=device-width, initial-scale=1">
      <title>AI Image Generator</title>
      <style>
        * {{ box-sizing: border-box; }}
        body {{ margin: 0; font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Arial, sans-serif; background: #f9fafb; color: #111827; }}
        nav {{ position: fixed; top: 0; left: 0; right: 0; height: 64px; display: flex; align-items: center; padding: 0 24px; background: #fff; border-bottom: 1px solid #e5e7eb; }}
        .brand {{ font-size: 1.5rem; font-weight: 700; background: linear-gradient(to right, #3b82f6, #9333ea); -webkit-background-clip: text; background-clip: text; color: transparent; }}
        main {{ max-width: 42rem; margin: 0 auto; padding: 96px 16px 48px; }}
        h1 {{ text-align: center; font-size: 2.25rem; }}
        form {{ display: flex; flex-direction: column; gap: 16px; }}
        input, select {{ width: 100%; padding: 12px; border: 1px solid #d1d5db; border-radius: 8px; font-size: 1rem; }}
        button {{ padding: 12px 24px; border: 0; border-radius: 8px; background: #3b82f6; color: #fff; font-size: 1rem; cursor: pointer; }}
        button:disabled {{ background: #93c5fd; cursor: not-allowed; }}
        .loading {{ margin-top: 16px; text-align: center; color: #6b7280; }}
        .error {{ margin-top: 24px; padding: 16px; border-radius: 8px; background: #fef2f2; color: #ef4444; text-align: center; }}
        .result {{ margin-top: 24px; }}
        .preview {{ width: 100%; max-width: 512px; margin: 0 auto; }}
        .preview img {{ width: 100%; height: 100%; object-fit: cover; border-radius: 8px; }}
        .details {{ max-width: 512px; margin: 16px auto 0; }}
        .details pre {{ background: #f3f4f6; padding: 8px; border-radius: 4px; overflow-x: auto; }}
      </style>
    </head>
    <body>
      <nav><span class="brand">Sportgeeks</span></nav>
      <main>
        <h1>AI Image Generator</h1>
        <form id="generator" method="post" action="/">
          <select name="model">
            {model_options}
          </select>
          <input type="text" name="prompt" value="{prompt}" placeholder="Enter your prompt (e.g., 'a magical forest at sunset')" required>
          <button type="submit" id="submit"{button_disabled}>{button_label}</button>
        </form>
        <div id="loading" class="loading"{loading_hidden}>Generating...</div>
        {error}
        {result}
      </main>
      <script>
        document.getElementById("generator").addEventListener("submit", function () {{
          var button = document.getElementById("submit");
          button.disabled = true;
          button.textContent = "Generating...";
          document.getElementById("loading").hidden = false;
        }});
      </script>
    </body>
    </html>
    """
).strip()
