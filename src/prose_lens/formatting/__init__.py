"""Line classification and markup segmentation."""

from prose_lens.formatting.ir import (
    LineCategory,
    Marker,
    ClassifiedLine,
    TextSpan,
    LinkSpan,
    Paragraph,
    Heading,
    ListItem,
    ListBlock,
    Quote,
    Code,
    ImageAsset,
    Image,
    UnknownBlock,
    TextStyle,
    BlockTag,
    TextRun,
    LinkRun,
    StyledBlock,
)
from prose_lens.formatting.classifier import LetterRanges, LineClassifier, classify_line
from prose_lens.formatting.segmenter import (
    RawMarkupSegmenter,
    contains_raw_markup,
    segment_markup,
)

__all__ = [
    "LineCategory",
    "Marker",
    "ClassifiedLine",
    "TextSpan",
    "LinkSpan",
    "Paragraph",
    "Heading",
    "ListItem",
    "ListBlock",
    "Quote",
    "Code",
    "ImageAsset",
    "Image",
    "UnknownBlock",
    "TextStyle",
    "BlockTag",
    "TextRun",
    "LinkRun",
    "StyledBlock",
    "LetterRanges",
    "LineClassifier",
    "classify_line",
    "RawMarkupSegmenter",
    "contains_raw_markup",
    "segment_markup",
]
