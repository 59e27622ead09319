"""Plain text chapter handler."""

from pathlib import Path

from prose_lens.formats.base import FormatHandler
from prose_lens.formats.html_handler import SCENE_BREAK_GLYPH
from prose_lens.formatting.ir import Block, BlockTag, Paragraph, StyledBlock, TextSpan


class TXTHandler(FormatHandler):
    """Handler for plain text (.txt) chapters.

    Each line of the file is a line of prose; blank lines become line
    breaks so that one blank line reads as spacing and two or more as a
    scene break. Output is plain text with an optional [category] prefix
    on every classified line.
    """

    def __init__(self, show_tags: bool = False) -> None:
        self.show_tags = show_tags

    @property
    def supported_extensions(self) -> tuple[str, ...]:
        return (".txt",)

    def read(self, path: Path) -> list[Block]:
        """Read a text file as one raw-markup paragraph of <br>-joined lines."""
        lines = self.read_text(path).splitlines()
        return [Paragraph(children=(TextSpan(text="<br>".join(lines)),))]

    def dumps(self, blocks: list[StyledBlock]) -> str:
        """Render blocks as plain text, separating blocks with blank lines."""
        return "\n\n".join(self._render_block(block) for block in blocks)

    def _render_block(self, block: StyledBlock) -> str:
        tag = block.tag

        if tag is BlockTag.SEGMENTED:
            return "\n".join(self._render_block(child) for child in block.children)
        if tag is BlockTag.SCENE_BREAK:
            return SCENE_BREAK_GLYPH
        if tag in (BlockTag.SPACING, BlockTag.SPACER):
            return ""
        if tag is BlockTag.LIST:
            lines = []
            for number, item in enumerate(block.children, start=1):
                bullet = f"{number}." if block.ordered else "-"
                lines.append(f"{bullet} {item.plain_text}")
            return "\n".join(lines)
        if tag is BlockTag.HEADING:
            return f"{'#' * (block.level or 2)} {block.plain_text}"
        if tag is BlockTag.QUOTE:
            return f"> {block.plain_text}"
        if tag is BlockTag.IMAGE:
            label = block.caption or block.alt or ""
            return f"[{label}]({block.url})"

        text = block.plain_text
        if self.show_tags:
            return f"[{tag.value}] {text}"
        return text
