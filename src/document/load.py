"""
Read YAML/JSON documents from text or files (PyYAML safe loader; JSON is valid YAML).
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

DOCUMENT_EXTENSIONS = {".yaml", ".yml", ".json"}


class DocumentLoadError(ValueError):
    """Document text could not be parsed."""

    def __init__(self, message: str, line: int | None = None) -> None:
        super().__init__(message)
        self.line = line


def parse_document(text: str, *, source: str = "<text>") -> Any:
    """
    Parse YAML text. Empty or comment-only text returns None (no document).
    Raises DocumentLoadError with a 1-based line number when available.
    """
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        mark = getattr(e, "problem_mark", None)
        line = mark.line + 1 if mark is not None else None
        where = f"{source}:{line}" if line else source
        raise DocumentLoadError(f"Invalid YAML in {where}: {e}", line=line) from e


def load_document(path: Path | str) -> Any:
    """Read and parse a document file."""
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Document not found: {path}")
    if path.suffix.lower() not in DOCUMENT_EXTENSIONS:
        logger.warning("Unexpected extension %s for %s; parsing as YAML", path.suffix, path.name)
    text = path.read_text(encoding="utf-8")
    logger.debug("Loaded %s (%d bytes)", path, len(text))
    return parse_document(text, source=path.name)
