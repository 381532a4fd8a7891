"""Fixed names used when reading .docx archives."""

from __future__ import annotations

DOCUMENT_XML_PATH = "word/document.xml"
DIRECTORY_FLAG = "-d"
DOCX_EXTENSION = "docx"

TEXT_TAG = "w:t"
RUN_TAG = "w:r"
BOLD_TAG = "w:b"
ITALIC_TAG = "w:i"
UNDERLINE_TAG = "w:u"
