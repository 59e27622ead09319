"""Chapter format handlers for Prose Lens."""

from prose_lens.formats.base import DocumentError, FormatHandler, ProseLensError
from prose_lens.formats.html_handler import HTMLHandler
from prose_lens.formats.json_handler import JSONHandler, load_blocks
from prose_lens.formats.txt_handler import TXTHandler

__all__ = [
    "DocumentError",
    "FormatHandler",
    "ProseLensError",
    "HTMLHandler",
    "JSONHandler",
    "TXTHandler",
    "load_blocks",
]

# Map file extensions to handlers
HANDLER_MAP: dict[str, type[FormatHandler]] = {
    ".json": JSONHandler,
    ".html": HTMLHandler,
    ".htm": HTMLHandler,
    ".txt": TXTHandler,
}

SUPPORTED_EXTENSIONS = tuple(HANDLER_MAP.keys())


def get_handler(extension: str) -> type[FormatHandler]:
    """Get the appropriate handler class for a file extension."""
    ext = extension.lower()
    if not ext.startswith("."):
        ext = f".{ext}"
    if ext not in HANDLER_MAP:
        raise ValueError(
            f"Unsupported file format: {ext}. "
            f"Supported formats: {', '.join(SUPPORTED_EXTENSIONS)}"
        )
    return HANDLER_MAP[ext]
