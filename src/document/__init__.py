"""Document: YAML/JSON loading and rebuild debouncing."""
from .load import DOCUMENT_EXTENSIONS, DocumentLoadError, load_document, parse_document
from .debounce import RebuildDebouncer

__all__ = [
    "DOCUMENT_EXTENSIONS",
    "DocumentLoadError",
    "load_document",
    "parse_document",
    "RebuildDebouncer",
]
