"""HTML chapter handler.

Reads a chapter stored as raw editor markup and writes rendered blocks
as an HTML fragment using the reader's CSS class names.
"""

from pathlib import Path

from prose_lens.formats.base import FormatHandler
from prose_lens.formatting.ir import (
    Block,
    BlockTag,
    LinkRun,
    Paragraph,
    Run,
    StyledBlock,
    TextSpan,
)
from prose_lens.formatting.segmenter import contains_raw_markup

SCENE_BREAK_GLYPH = "✦"

# CSS classes for each inline style flag, in output order
STYLE_CLASSES = (
    ("bold", "font-bold"),
    ("italic", "italic"),
    ("underline", "underline"),
    ("strikethrough", "line-through"),
)


def escape_html(text: str, quote: bool = False) -> str:
    """Escape HTML special characters."""
    escaped = (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
    )
    if quote:
        escaped = escaped.replace('"', "&quot;")
    return escaped


class HTMLHandler(FormatHandler):
    """Handler for HTML chapters.

    The whole file is read as a single raw-markup paragraph, so the
    renderer re-segments it into classified lines. Files with only inline
    tags are wrapped in a <div> so their tags are stripped the same way.
    """

    @property
    def supported_extensions(self) -> tuple[str, ...]:
        return (".html", ".htm")

    def read(self, path: Path) -> list[Block]:
        """Read an HTML file as one raw-markup paragraph."""
        markup = self.read_text(path)
        if not contains_raw_markup(markup):
            markup = f"<div>{markup}</div>"
        return [Paragraph(children=(TextSpan(text=markup),))]

    def dumps(self, blocks: list[StyledBlock]) -> str:
        """Render blocks as an HTML fragment, one element per line."""
        return "\n".join(self._render_block(block) for block in blocks)

    def _render_block(self, block: StyledBlock) -> str:
        tag = block.tag

        if tag is BlockTag.SCENE_BREAK:
            return (
                '<div class="scene-break" aria-hidden="true">'
                f"<span>{SCENE_BREAK_GLYPH}</span></div>"
            )
        if tag in (BlockTag.SPACING, BlockTag.SPACER):
            return f'<div class="{tag.value}"></div>'
        if tag is BlockTag.SEGMENTED:
            inner = "\n".join(self._render_block(child) for child in block.children)
            return f'<div class="smart-content">\n{inner}\n</div>'
        if tag is BlockTag.HEADING:
            level = block.level or 2
            css = block.style or f"heading-{level}"
            content = self._render_runs(block.runs)
            return f'<h{level} class="{css}">{content}</h{level}>'
        if tag is BlockTag.LIST:
            list_tag = "ol" if block.ordered else "ul"
            items = "".join(
                f"<li>{self._render_runs(item.runs)}</li>" for item in block.children
            )
            return f"<{list_tag}>{items}</{list_tag}>"
        if tag is BlockTag.QUOTE:
            return f"<blockquote>{self._render_runs(block.runs)}</blockquote>"
        if tag is BlockTag.CODE:
            return f"<pre><code>{escape_html(block.text)}</code></pre>"
        if tag is BlockTag.IMAGE:
            return self._render_image(block)

        # Classified text: segmented lines carry text, paragraphs carry runs
        content = self._render_runs(block.runs) if block.runs else escape_html(block.text)
        element = "div" if tag is BlockTag.GAME_BADGE else "p"
        return f'<{element} class="{tag.value}">{content}</{element}>'

    def _render_image(self, block: StyledBlock) -> str:
        parts = [
            '<figure class="illustration">',
            f'<img src="{escape_html(block.url or "", quote=True)}" '
            f'alt="{escape_html(block.alt or "", quote=True)}" loading="lazy"/>',
        ]
        if block.caption:
            parts.append(f"<figcaption>{escape_html(block.caption)}</figcaption>")
        parts.append("</figure>")
        return "".join(parts)

    def _render_runs(self, runs: tuple[Run, ...]) -> str:
        return "".join(self._render_run(run) for run in runs)

    def _render_run(self, run: Run) -> str:
        if isinstance(run, LinkRun):
            href = escape_html(run.url or "#", quote=True)
            return (
                f'<a href="{href}" target="_blank" rel="noopener noreferrer">'
                f"{self._render_runs(run.runs)}</a>"
            )

        text = escape_html(run.text)
        if run.code:
            return f"<code>{text}</code>"
        classes = [css for name, css in STYLE_CLASSES if getattr(run, name)]
        if classes:
            return f'<span class="{" ".join(classes)}">{text}</span>'
        return f"<span>{text}</span>"
