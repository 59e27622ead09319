"""Abstract base class for chapter format handlers."""

from abc import ABC, abstractmethod
from pathlib import Path

from prose_lens.formatting.ir import Block, StyledBlock


class ProseLensError(Exception):
    """Base error for Prose Lens."""

    pass


class DocumentError(ProseLensError):
    """Error reading or decoding a chapter document."""

    pass


class FormatHandler(ABC):
    """Abstract base class for chapter format handlers.

    Each handler reads a chapter file into structured blocks and
    serializes rendered StyledBlocks back into its own format.
    """

    @property
    @abstractmethod
    def supported_extensions(self) -> tuple[str, ...]:
        """Return tuple of supported file extensions (e.g., ('.json',))."""
        ...

    @abstractmethod
    def read(self, path: Path) -> list[Block]:
        """Read a chapter file into structured blocks.

        Args:
            path: Path to the chapter file

        Returns:
            Ordered list of document blocks

        Raises:
            DocumentError: If the file cannot be decoded
        """
        ...

    @abstractmethod
    def dumps(self, blocks: list[StyledBlock]) -> str:
        """Serialize rendered blocks to a string in this format."""
        ...

    def write(self, blocks: list[StyledBlock], path: Path) -> None:
        """Write rendered blocks to a file.

        Args:
            blocks: The rendered StyledBlocks
            path: Path to write the output file
        """
        path.write_text(self.dumps(blocks), encoding="utf-8")

    def read_text(self, path: Path) -> str:
        """Read a UTF-8 text file, wrapping failures in DocumentError."""
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentError(f"Cannot read {path}: {e}") from e
