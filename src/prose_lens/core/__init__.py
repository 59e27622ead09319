"""Core rendering logic for Prose Lens."""

from prose_lens.core.renderer import DocumentRenderer, render_document

__all__ = [
    "DocumentRenderer",
    "render_document",
]
