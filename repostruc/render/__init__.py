"""Output renderers for analysis results.

``render`` picks the renderer for a format name. All renderers share the
sort/truncation contract in ``repostruc.render.tree``.
"""

from __future__ import annotations

from collections.abc import Callable

from ..analyzer import AnalysisResult
from ..config import normalize_format
from .json_format import render_json
from .markdown import render_markdown
from .options import DisplayOptions
from .text import render_text

Renderer = Callable[[AnalysisResult, DisplayOptions], str]

RENDERERS: dict[str, Renderer] = {
    "txt": render_text,
    "json": render_json,
    "markdown": render_markdown,
}


def render(result: AnalysisResult, output_format: str, options: DisplayOptions) -> str:
    """Render ``result`` as ``txt``, ``json`` or ``markdown``.

    Raises ``ValueError`` (``ConfigError``) for unknown format names.
    """
    return RENDERERS[normalize_format(output_format)](result, options)


__all__ = [
    "DisplayOptions",
    "RENDERERS",
    "render",
    "render_json",
    "render_markdown",
    "render_text",
]
