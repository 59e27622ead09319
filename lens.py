#!/usr/bin/env python3
"""
Prose Lens - automatic styling for chapter prose

Simple usage:
    python lens.py classify "« Tu es prêt ? »"     # Print the line's category
    python lens.py segment chapter.html             # Show classified lines
    python lens.py render chapter.json -f html      # Render to an HTML fragment
"""

import sys
from pathlib import Path

# Add src to path for development
src_path = Path(__file__).parent / "src"
if src_path.exists():
    sys.path.insert(0, str(src_path))

from prose_lens.cli import app

if __name__ == "__main__":
    app()
