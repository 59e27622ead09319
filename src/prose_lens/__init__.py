"""Prose Lens - automatic styling of dialogue, thoughts and sound effects in chapter text."""

__version__ = "0.1.0"

from prose_lens.formatting import (
    LineCategory,
    LineClassifier,
    RawMarkupSegmenter,
    StyledBlock,
    classify_line,
    segment_markup,
)
from prose_lens.core import DocumentRenderer, render_document

__all__ = [
    "__version__",
    "LineCategory",
    "LineClassifier",
    "RawMarkupSegmenter",
    "StyledBlock",
    "DocumentRenderer",
    "classify_line",
    "segment_markup",
    "render_document",
]
