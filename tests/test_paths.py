from pathlib import Path

import pytest

from docxtract.errors import PathPropertiesError
from docxtract.paths import PathProperties, select_document


def test_select_document_allocates_unique_directory(docx_file: Path, tmp_path: Path) -> None:
    root = tmp_path / "extract"
    first = select_document(docx_file, temp_root=root)
    second = select_document(docx_file, temp_root=root)

    assert first.last_path == "sample.docx"
    assert first.path == docx_file.resolve()
    assert first.temp_directory.parent == root
    assert not first.temp_directory.exists()
    assert first.temp_directory != second.temp_directory
    assert first == second
    assert hash(first) == hash(second)


def test_select_document_filters_by_extension(tmp_path: Path) -> None:
    text_file = tmp_path / "notes.txt"
    text_file.write_text("hi", encoding="utf-8")
    with pytest.raises(PathPropertiesError, match="unsupported extension"):
        select_document(text_file)
    assert select_document(text_file, ["docx", ".TXT"]).last_path == "notes.txt"


def test_select_document_requires_existing_file(tmp_path: Path) -> None:
    with pytest.raises(PathPropertiesError, match="no such file"):
        select_document(tmp_path / "missing.docx")


def test_select_document_rejects_file_as_temp_root(docx_file: Path, tmp_path: Path) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("", encoding="utf-8")
    with pytest.raises(PathPropertiesError, match="not a directory"):
        select_document(docx_file, temp_root=blocker)


def test_path_properties_equality_ignores_temp_directory(tmp_path: Path) -> None:
    a = PathProperties("a.docx", tmp_path / "a.docx", tmp_path / "one")
    b = PathProperties("a.docx", tmp_path / "a.docx", tmp_path / "two")
    c = PathProperties("b.docx", tmp_path / "b.docx", tmp_path / "one")
    assert a == b
    assert a != c
