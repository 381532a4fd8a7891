from __future__ import annotations

import zipfile
from pathlib import Path

import pytest

W_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"

DOCUMENT_XML = (
    '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
    f'<w:document xmlns:w="{W_NS}"><w:body><w:p>'
    "<w:r><w:rPr><w:b/></w:rPr><w:t>Hello</w:t></w:r>"
    "<w:r><w:t>World</w:t></w:r>"
    "</w:p></w:body></w:document>"
)


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for name in (
        "DOCXTRACT_LOG_LEVEL",
        "DOCXTRACT_TEMP_ROOT",
        "DOCXTRACT_KEEP_EXTRACTED",
        "DOCXTRACT_UNZIP_TIMEOUT_SECONDS",
        "DOCXTRACT_ACCEPTED_EXTENSIONS",
    ):
        monkeypatch.delenv(name, raising=False)
    # Keep a developer's .env out of the tests.
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def document_xml() -> str:
    return DOCUMENT_XML


@pytest.fixture
def docx_file(tmp_path: Path) -> Path:
    path = tmp_path / "sample.docx"
    with zipfile.ZipFile(path, "w") as archive:
        archive.writestr("[Content_Types].xml", "<Types/>")
        archive.writestr("word/document.xml", DOCUMENT_XML)
    return path
