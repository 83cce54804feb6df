"""Public package surface for repostruc.

Exports ``main`` for programmatic CLI invocation plus the two core entry
points, ``analyze`` and ``render``.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


def analyze(*args, **kwargs):
    """Run one analysis pass; see ``repostruc.analyzer.analyze``."""
    from .analyzer import analyze as _analyze

    return _analyze(*args, **kwargs)


def render(*args, **kwargs):
    """Render an analysis result; see ``repostruc.render.render``."""
    from .render import render as _render

    return _render(*args, **kwargs)


__all__ = ["main", "analyze", "render"]
