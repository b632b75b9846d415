"""Tests for document loading."""
from __future__ import annotations

import logging
from pathlib import Path

import pytest

from src.document import DocumentLoadError, load_document, parse_document


def test_parse_yaml_mapping() -> None:
    doc = parse_document("name: Root\nchildren:\n  - name: A\n  - name: B\n")
    assert doc == {"name": "Root", "children": [{"name": "A"}, {"name": "B"}]}


def test_parse_json_text() -> None:
    assert parse_document('{"name": "Root", "port": 80}') == {"name": "Root", "port": 80}


def test_empty_text_is_no_document() -> None:
    assert parse_document("") is None
    assert parse_document("# only a comment\n") is None


def test_invalid_yaml_reports_line() -> None:
    with pytest.raises(DocumentLoadError) as exc_info:
        parse_document("name: Root\n- stray item\n", source="broken.yaml")
    assert exc_info.value.line is not None
    assert "broken.yaml" in str(exc_info.value)
    assert isinstance(exc_info.value, ValueError)


def test_load_document_file(tmp_path: Path) -> None:
    path = tmp_path / "tree.yml"
    path.write_text("Service:\n  port: 80\n", encoding="utf-8")
    assert load_document(path) == {"Service": {"port": 80}}


def test_load_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_document(tmp_path / "nope.yaml")


def test_unexpected_extension_warns(tmp_path: Path, caplog) -> None:
    path = tmp_path / "tree.txt"
    path.write_text("name: X\nv: 1\n", encoding="utf-8")
    with caplog.at_level(logging.WARNING):
        assert load_document(path) == {"name": "X", "v": 1}
    assert "Unexpected extension" in caplog.text
