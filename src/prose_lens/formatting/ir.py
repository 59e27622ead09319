"""Intermediate Representation for chapter content.

This module defines the data structures that flow through the engine:
the structured blocks delivered by the content store, the categories
and markers produced by line classification and segmentation, and the
neutral styled blocks handed to a presentation layer.
"""

from dataclasses import dataclass, field
from enum import Enum, Flag, auto
from typing import Any, Optional, Union


# =============================================================================
# Line classification
# =============================================================================

class LineCategory(str, Enum):
    """Semantic category of a single line of prose."""

    EMPTY = "empty"
    GAME_BADGE = "game-badge"
    DIALOGUE = "dialogue"
    THOUGHT = "thought"
    SFX = "sfx"
    NARRATION = "narration"


class Marker(str, Enum):
    """Structural markers emitted between lines by segmentation."""

    SCENE_BREAK = "scene-break"
    SPACING = "spacing"


@dataclass(frozen=True)
class ClassifiedLine:
    """A trimmed line of text and the category it was classified as."""

    category: LineCategory
    text: str


Segment = Union[ClassifiedLine, Marker]


# =============================================================================
# Structured document (input)
# =============================================================================

@dataclass(frozen=True)
class TextSpan:
    """A run of inline text with its formatting flags."""

    text: str = ""
    bold: bool = False
    italic: bool = False
    underline: bool = False
    strikethrough: bool = False
    code: bool = False


@dataclass(frozen=True)
class LinkSpan:
    """A hyperlink wrapping further inline nodes."""

    url: Optional[str] = None
    children: tuple["InlineNode", ...] = ()


InlineNode = Union[TextSpan, LinkSpan]


@dataclass(frozen=True)
class Paragraph:
    children: tuple[InlineNode, ...] = ()


@dataclass(frozen=True)
class Heading:
    level: Optional[int] = None
    children: tuple[InlineNode, ...] = ()


@dataclass(frozen=True)
class ListItem:
    children: tuple[InlineNode, ...] = ()


@dataclass(frozen=True)
class ListBlock:
    ordered: bool = False
    items: tuple[ListItem, ...] = ()


@dataclass(frozen=True)
class Quote:
    children: tuple[InlineNode, ...] = ()


@dataclass(frozen=True)
class Code:
    children: tuple[InlineNode, ...] = ()


@dataclass(frozen=True)
class ImageAsset:
    """Media library entry attached to an image block.

    Attributes:
        url: Public URL of the uploaded file
        alternative_text: Alt text stored with the media entry
        caption: Caption stored with the media entry
    """

    url: Optional[str] = None
    alternative_text: Optional[str] = None
    caption: Optional[str] = None


@dataclass(frozen=True)
class Image:
    """An image block.

    Attributes:
        url: Bare URL set directly on the block
        alt: Alt text set directly on the block
        caption: Caption set directly on the block
        image: Nested media reference, preferred for the URL
    """

    url: Optional[str] = None
    alt: Optional[str] = None
    caption: Optional[str] = None
    image: Optional[ImageAsset] = None


@dataclass(frozen=True)
class UnknownBlock:
    """A block whose type this version does not know about."""

    type: str
    children: Optional[tuple[InlineNode, ...]] = None


Block = Union[Paragraph, Heading, ListBlock, Quote, Code, Image, UnknownBlock]


# =============================================================================
# Styled output
# =============================================================================

class TextStyle(Flag):
    """Text styling flags (combinable with |)."""

    NONE = 0
    BOLD = auto()
    ITALIC = auto()
    UNDERLINE = auto()
    STRIKETHROUGH = auto()


class BlockTag(str, Enum):
    """Discriminant of a StyledBlock.

    The first six values mirror LineCategory so classified text keeps the
    same tag on the way out.
    """

    EMPTY = "empty"
    GAME_BADGE = "game-badge"
    DIALOGUE = "dialogue"
    THOUGHT = "thought"
    SFX = "sfx"
    NARRATION = "narration"
    SCENE_BREAK = "scene-break"
    SPACING = "spacing"
    SPACER = "spacer"
    HEADING = "heading"
    LIST = "list"
    LIST_ITEM = "list-item"
    QUOTE = "quote"
    CODE = "code"
    IMAGE = "image"
    SEGMENTED = "segmented"

    @classmethod
    def for_category(cls, category: LineCategory) -> "BlockTag":
        """Map a line category onto its block tag."""
        return cls(category.value)

    @classmethod
    def for_marker(cls, marker: Marker) -> "BlockTag":
        """Map a segmentation marker onto its block tag."""
        return cls(marker.value)


@dataclass(frozen=True)
class TextRun:
    """A contiguous run of rendered text with consistent styling.

    Attributes:
        text: The text content
        style: Combined style flags
        code: Inline code token; style is always NONE when set
    """

    text: str
    style: TextStyle = TextStyle.NONE
    code: bool = False

    @property
    def bold(self) -> bool:
        return TextStyle.BOLD in self.style

    @property
    def italic(self) -> bool:
        return TextStyle.ITALIC in self.style

    @property
    def underline(self) -> bool:
        return TextStyle.UNDERLINE in self.style

    @property
    def strikethrough(self) -> bool:
        return TextStyle.STRIKETHROUGH in self.style

    @property
    def plain_text(self) -> str:
        return self.text

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": "text", "text": self.text}
        if self.code:
            data["code"] = True
        for name in ("bold", "italic", "underline", "strikethrough"):
            if getattr(self, name):
                data[name] = True
        return data

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class LinkRun:
    """A rendered hyperlink; url is None when the source had no target."""

    url: Optional[str]
    runs: tuple["Run", ...] = ()

    @property
    def plain_text(self) -> str:
        return "".join(run.plain_text for run in self.runs)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "link",
            "url": self.url,
            "runs": [run.to_dict() for run in self.runs],
        }

    def __str__(self) -> str:
        return self.plain_text


Run = Union[TextRun, LinkRun]


@dataclass(frozen=True)
class StyledBlock:
    """Framework-neutral description of one rendered block.

    Attributes:
        tag: What kind of block this is
        text: Plain text payload (classified lines, code)
        runs: Rendered inline content
        children: Nested blocks (list items, segmented lines)
        level: Heading level (1-6)
        ordered: List ordering flag
        url: Image URL
        alt: Image alt text
        caption: Image caption
        style: Style tier name for blocks that have one
    """

    tag: BlockTag
    text: str = ""
    runs: tuple[Run, ...] = ()
    children: tuple["StyledBlock", ...] = ()
    level: Optional[int] = None
    ordered: Optional[bool] = None
    url: Optional[str] = None
    alt: Optional[str] = None
    caption: Optional[str] = None
    style: Optional[str] = None

    @property
    def plain_text(self) -> str:
        """Get the text content without styling."""
        if self.runs:
            return "".join(run.plain_text for run in self.runs)
        if self.children:
            return "\n".join(child.plain_text for child in self.children)
        return self.text

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-compatible dict, omitting unset fields."""
        data: dict[str, Any] = {"tag": self.tag.value}
        if self.text:
            data["text"] = self.text
        if self.runs:
            data["runs"] = [run.to_dict() for run in self.runs]
        if self.children:
            data["children"] = [child.to_dict() for child in self.children]
        for name in ("level", "ordered", "url", "alt", "caption", "style"):
            value = getattr(self, name)
            if value is not None:
                data[name] = value
        return data
