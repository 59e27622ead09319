"""Segmentation of raw chapter markup into classified lines.

Some chapters arrive as a single paragraph whose text is itself HTML
produced by an older editor (``<p>``, ``<div>`` and ``<br>`` soup). The
segmenter flattens that markup into lines, classifies each one and
turns runs of blank lines into spacing or scene-break markers.
"""

import re
from dataclasses import dataclass
from functools import reduce
from typing import Optional

from prose_lens.formatting.classifier import LineClassifier, get_classifier
from prose_lens.formatting.ir import ClassifiedLine, Marker, Segment


BLOCK_TAG_PATTERN = re.compile(r"</?(?:div|p)>", re.IGNORECASE)
LINE_BREAK_PATTERN = re.compile(r"<br\s*/?>", re.IGNORECASE)
ANY_TAG_PATTERN = re.compile(r"<[^>]+>")

# Heuristic only: a block or break tag name followed by whitespace or ">"
RAW_MARKUP_PATTERN = re.compile(r"<(?:div|p|br)[\s>]", re.IGNORECASE)


def contains_raw_markup(text: str) -> bool:
    """Check whether text embeds block or line-break markup.

    This is a substring heuristic, not a parser. Self-closing ``<br/>``
    without a space is deliberately not detected.
    """
    return RAW_MARKUP_PATTERN.search(text) is not None


def split_markup_lines(markup: str) -> list[str]:
    """Flatten markup into trimmed, tag-free line candidates."""
    flattened = BLOCK_TAG_PATTERN.sub("\n", markup)
    flattened = LINE_BREAK_PATTERN.sub("\n", flattened)
    return [ANY_TAG_PATTERN.sub("", part).strip() for part in flattened.split("\n")]


@dataclass(frozen=True)
class _FoldState:
    """Accumulator threaded through the segmentation fold."""

    pending_blanks: int = 0
    items: tuple[Segment, ...] = ()


class RawMarkupSegmenter:
    """Turn a raw markup blob into classified lines and markers.

    One blank line between two lines becomes Marker.SPACING, two or more
    become a single Marker.SCENE_BREAK. Blank lines at the start or end
    of the input produce nothing.
    """

    def __init__(self, classifier: Optional[LineClassifier] = None) -> None:
        self.classifier = classifier or get_classifier()

    def segment(self, markup: str) -> list[Segment]:
        """Segment markup text into ClassifiedLine and Marker values."""
        final = reduce(self._step, split_markup_lines(markup), _FoldState())
        return list(final.items)

    def _step(self, state: _FoldState, line: str) -> _FoldState:
        if not line:
            return _FoldState(state.pending_blanks + 1, state.items)

        items = state.items
        if items and state.pending_blanks >= 2:
            items += (Marker.SCENE_BREAK,)
        elif items and state.pending_blanks == 1:
            items += (Marker.SPACING,)

        classified = ClassifiedLine(self.classifier.classify(line), line)
        return _FoldState(0, items + (classified,))


def segment_markup(markup: str) -> list[Segment]:
    """Segment markup with the shared classifier."""
    return RawMarkupSegmenter().segment(markup)
