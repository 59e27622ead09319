"""JSON chapter handler.

Chapters come from the content store as JSON lists of rich-text block
objects, for example::

    [
      {"type": "paragraph", "children": [{"type": "text", "text": "..."}]},
      {"type": "heading", "level": 2, "children": [...]},
      {"type": "image", "image": {"url": "...", "alternativeText": "..."}}
    ]

Every field is optional. Missing values fall back to defaults rather
than raising, so partially filled documents still render.
"""

import json
from pathlib import Path
from typing import Any, Optional

from prose_lens.formats.base import DocumentError, FormatHandler
from prose_lens.formatting.ir import (
    Block,
    Code,
    Heading,
    Image,
    ImageAsset,
    InlineNode,
    LinkSpan,
    ListBlock,
    ListItem,
    Paragraph,
    Quote,
    StyledBlock,
    TextSpan,
    UnknownBlock,
)

# Keys that may hold the block list when a chapter is wrapped in an object
DOCUMENT_KEYS = ("texte", "blocks", "content")


def _optional_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def parse_inlines(nodes: Any) -> tuple[InlineNode, ...]:
    """Convert raw inline nodes, skipping types that are not text or link."""
    if not isinstance(nodes, list):
        return ()

    inlines: list[InlineNode] = []
    for node in nodes:
        if not isinstance(node, dict):
            continue
        node_type = node.get("type")
        if node_type == "text":
            inlines.append(
                TextSpan(
                    text=node.get("text") or "",
                    bold=bool(node.get("bold")),
                    italic=bool(node.get("italic")),
                    underline=bool(node.get("underline")),
                    strikethrough=bool(node.get("strikethrough")),
                    code=bool(node.get("code")),
                )
            )
        elif node_type == "link":
            inlines.append(
                LinkSpan(
                    url=_optional_str(node.get("url")),
                    children=parse_inlines(node.get("children")),
                )
            )
    return tuple(inlines)


def parse_block(data: dict[str, Any]) -> Block:
    """Convert one raw block object into its dataclass."""
    block_type = data.get("type")
    children = parse_inlines(data.get("children"))

    if block_type == "paragraph":
        return Paragraph(children=children)
    if block_type == "heading":
        level = data.get("level")
        return Heading(
            level=level if isinstance(level, int) else None,
            children=children,
        )
    if block_type == "list":
        items = data.get("children")
        return ListBlock(
            ordered=data.get("format") == "ordered" or data.get("ordered") is True,
            items=tuple(
                ListItem(children=parse_inlines(item.get("children")))
                for item in (items if isinstance(items, list) else [])
                if isinstance(item, dict)
            ),
        )
    if block_type == "quote":
        return Quote(children=children)
    if block_type == "code":
        return Code(children=children)
    if block_type == "image":
        asset = data.get("image")
        return Image(
            url=_optional_str(data.get("url")),
            alt=_optional_str(data.get("alt")),
            caption=_optional_str(data.get("caption")),
            image=ImageAsset(
                url=_optional_str(asset.get("url")),
                alternative_text=_optional_str(asset.get("alternativeText")),
                caption=_optional_str(asset.get("caption")),
            ) if isinstance(asset, dict) else None,
        )

    return UnknownBlock(
        type=str(block_type),
        children=children if isinstance(data.get("children"), list) else None,
    )


def load_blocks(data: Any) -> list[Block]:
    """Convert a decoded chapter document into blocks.

    Args:
        data: A list of block objects, or an object holding one under
            "texte", "blocks" or "content"

    Returns:
        Ordered list of document blocks

    Raises:
        DocumentError: If no block list can be found
    """
    if isinstance(data, dict):
        for key in DOCUMENT_KEYS:
            if isinstance(data.get(key), list):
                data = data[key]
                break

    if not isinstance(data, list):
        raise DocumentError("Chapter document must be a list of blocks")

    return [parse_block(item) for item in data if isinstance(item, dict)]


class JSONHandler(FormatHandler):
    """Handler for structured JSON chapters."""

    @property
    def supported_extensions(self) -> tuple[str, ...]:
        return (".json",)

    def read(self, path: Path) -> list[Block]:
        """Read and decode a structured JSON chapter."""
        text = self.read_text(path)
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise DocumentError(f"Invalid JSON in {path}: {e}") from e
        return load_blocks(data)

    def dumps(self, blocks: list[StyledBlock]) -> str:
        """Serialize rendered blocks as an indented JSON list."""
        return json.dumps(
            [block.to_dict() for block in blocks],
            ensure_ascii=False,
            indent=2,
        )
