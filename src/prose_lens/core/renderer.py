"""Rendering of structured chapter documents into styled blocks."""

import logging
from typing import Iterable, Optional, Sequence

from prose_lens.config import get_settings
from prose_lens.formatting.classifier import LineClassifier, get_classifier
from prose_lens.formatting.ir import (
    Block,
    BlockTag,
    ClassifiedLine,
    Code,
    Heading,
    Image,
    InlineNode,
    LineCategory,
    LinkRun,
    LinkSpan,
    ListBlock,
    Paragraph,
    Quote,
    Run,
    Segment,
    StyledBlock,
    TextRun,
    TextSpan,
    TextStyle,
    UnknownBlock,
)
from prose_lens.formatting.segmenter import RawMarkupSegmenter, contains_raw_markup

logger = logging.getLogger(__name__)

DEFAULT_HEADING_LEVEL = 2
DEFAULT_IMAGE_ALT = "Illustration"


def span_text(children: Sequence[InlineNode]) -> str:
    """Concatenate the text of top-level text spans.

    Link text is not included.
    """
    return "".join(child.text for child in children if isinstance(child, TextSpan))


def is_empty_paragraph(block: Block) -> bool:
    """Check for a paragraph with no children or a single blank text span."""
    if not isinstance(block, Paragraph):
        return False
    children = block.children
    if not children:
        return True
    return (
        len(children) == 1
        and isinstance(children[0], TextSpan)
        and not children[0].text.strip()
    )


def normalize_heading_level(level: Optional[int]) -> int:
    """Return level when it is 1-6, otherwise the default level 2."""
    if isinstance(level, int) and 1 <= level <= 6:
        return level
    return DEFAULT_HEADING_LEVEL


class DocumentRenderer:
    """Render structured chapter blocks into framework-neutral StyledBlocks.

    Pipeline:
    1. Drop editor artifacts and collapse runs of empty paragraphs
    2. Dispatch each block by type
    3. Paragraphs holding raw markup are re-segmented line by line,
       other paragraphs are classified as a whole
    """

    def __init__(
        self,
        classifier: Optional[LineClassifier] = None,
        denylist: Optional[Iterable[str]] = None,
        skip_empty_spans: Optional[bool] = None,
    ) -> None:
        """Initialize the renderer.

        Args:
            classifier: Line classifier (default: shared configured one)
            denylist: Texts that mark a paragraph as an editor artifact
            skip_empty_spans: Drop text spans with empty text. Off by default,
                which keeps every span as the reader always has.
        """
        settings = get_settings()
        self.classifier = classifier or get_classifier()
        self.segmenter = RawMarkupSegmenter(self.classifier)
        self.denylist = frozenset(
            settings.artifact_denylist if denylist is None else denylist
        )
        self.skip_empty_spans = (
            settings.skip_empty_spans if skip_empty_spans is None else skip_empty_spans
        )

    def render(self, blocks: Iterable[Block]) -> list[StyledBlock]:
        """Render a document into an ordered list of styled blocks."""
        rendered: list[StyledBlock] = []
        for block in self.filter_blocks(blocks):
            styled = self.render_block(block)
            if styled is not None:
                rendered.append(styled)
        return rendered

    def is_artifact(self, block: Block) -> bool:
        """Check for a paragraph whose only text is a denylisted artifact."""
        return (
            isinstance(block, Paragraph)
            and len(block.children) == 1
            and isinstance(block.children[0], TextSpan)
            and block.children[0].text.strip() in self.denylist
        )

    def filter_blocks(self, blocks: Iterable[Block]) -> list[Block]:
        """Remove artifacts and redundant empty paragraphs.

        A run of empty paragraphs between two non-empty blocks keeps its
        first member. Leading and trailing runs are dropped.
        """
        result: list[Block] = []
        pending_empty: Optional[Block] = None

        for block in blocks:
            if self.is_artifact(block):
                logger.debug("Dropping editor artifact block: %r", block)
                continue
            if is_empty_paragraph(block):
                if result and pending_empty is None:
                    pending_empty = block
                continue
            if pending_empty is not None:
                result.append(pending_empty)
                pending_empty = None
            result.append(block)

        return result

    def render_block(self, block: Block) -> Optional[StyledBlock]:
        """Render one block, or return None when it should be omitted."""
        if isinstance(block, Paragraph):
            return self._render_paragraph(block)
        if isinstance(block, Heading):
            level = normalize_heading_level(block.level)
            return StyledBlock(
                tag=BlockTag.HEADING,
                runs=self.render_inline(block.children),
                level=level,
                style=f"heading-{level}",
            )
        if isinstance(block, ListBlock):
            items = tuple(
                StyledBlock(
                    tag=BlockTag.LIST_ITEM,
                    runs=self.render_inline(item.children),
                )
                for item in block.items
            )
            return StyledBlock(
                tag=BlockTag.LIST,
                children=items,
                ordered=block.ordered,
                style="ordered" if block.ordered else "unordered",
            )
        if isinstance(block, Quote):
            return StyledBlock(tag=BlockTag.QUOTE, runs=self.render_inline(block.children))
        if isinstance(block, Code):
            return StyledBlock(tag=BlockTag.CODE, text=span_text(block.children))
        if isinstance(block, Image):
            return self._render_image(block)
        if isinstance(block, UnknownBlock) and block.children is not None:
            logger.debug("Rendering unknown block type %r as narration", block.type)
            return StyledBlock(
                tag=BlockTag.NARRATION,
                runs=self.render_inline(block.children),
            )

        logger.debug("Omitting block without content: %r", block)
        return None

    def _render_paragraph(self, block: Paragraph) -> StyledBlock:
        children = block.children
        if any(
            isinstance(child, TextSpan) and contains_raw_markup(child.text)
            for child in children
        ):
            segments = self.segmenter.segment(span_text(children))
            return StyledBlock(
                tag=BlockTag.SEGMENTED,
                children=tuple(self._segment_block(s) for s in segments),
            )

        category = self.classifier.classify(span_text(children))
        runs = self.render_inline(children)
        if category is LineCategory.EMPTY:
            # Link text is not classified but still has to be shown
            if not "".join(run.plain_text for run in runs).strip():
                return StyledBlock(tag=BlockTag.SPACER)
            category = LineCategory.NARRATION
        return StyledBlock(tag=BlockTag.for_category(category), runs=runs)

    def _segment_block(self, segment: Segment) -> StyledBlock:
        if isinstance(segment, ClassifiedLine):
            return StyledBlock(
                tag=BlockTag.for_category(segment.category),
                text=segment.text,
            )
        return StyledBlock(tag=BlockTag.for_marker(segment))

    def _render_image(self, block: Image) -> Optional[StyledBlock]:
        asset = block.image
        url = (asset.url if asset else None) or block.url
        if not url:
            logger.debug("Omitting image block without a resolvable URL")
            return None

        alt = (
            (asset.alternative_text if asset else None)
            or block.alt
            or block.caption
            or DEFAULT_IMAGE_ALT
        )
        caption = block.caption or (asset.caption if asset else None)
        return StyledBlock(tag=BlockTag.IMAGE, url=url, alt=alt, caption=caption)

    def render_inline(self, children: Sequence[InlineNode]) -> tuple[Run, ...]:
        """Render inline spans recursively into runs."""
        runs: list[Run] = []
        for child in children:
            if isinstance(child, TextSpan):
                if self.skip_empty_spans and child.text == "":
                    continue
                runs.append(self._render_span(child))
            elif isinstance(child, LinkSpan):
                runs.append(LinkRun(url=child.url, runs=self.render_inline(child.children)))
        return tuple(runs)

    @staticmethod
    def _render_span(span: TextSpan) -> TextRun:
        if span.code:
            return TextRun(text=span.text, code=True)

        style = TextStyle.NONE
        if span.bold:
            style |= TextStyle.BOLD
        if span.italic:
            style |= TextStyle.ITALIC
        if span.underline:
            style |= TextStyle.UNDERLINE
        if span.strikethrough:
            style |= TextStyle.STRIKETHROUGH
        return TextRun(text=span.text, style=style)


def render_document(blocks: Iterable[Block]) -> list[StyledBlock]:
    """Render blocks with a renderer built from the current settings."""
    return DocumentRenderer().render(blocks)
