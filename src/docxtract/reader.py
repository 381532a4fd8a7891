"""Extraction pipeline: unzip a .docx and parse its main document part."""

from __future__ import annotations

import shutil
from collections.abc import Callable
from pathlib import Path

from loguru import logger

from docxtract.config import Settings, get_settings
from docxtract.constants import DIRECTORY_FLAG, DOCUMENT_XML_PATH
from docxtract.errors import ContentFileNotFoundError, MarkupParseError, PathPropertiesError
from docxtract.executable import Executable
from docxtract.parser import DocxDocumentParser
from docxtract.paths import PathProperties, select_document
from docxtract.rules import FormattingRules


class DocxDocumentReader:
    """Read the text of one selected .docx document."""

    def __init__(self, path_properties: PathProperties, *, settings: Settings | None = None) -> None:
        self.path_properties = path_properties
        self.settings = settings or get_settings()

    def generate[ItemT](self, rules_type: Callable[[], FormattingRules[ItemT]]) -> list[ItemT] | None:
        """Extract the archive and parse ``word/document.xml`` with ``rules_type``.

        Raises:
            PathPropertiesError: The extraction directory cannot be created.
            ExecutableError: unzip failed.
            ContentFileNotFoundError: The archive has no ``word/document.xml``.
            MarkupParseError: The document part is not valid UTF-8 XML.
        """
        temp_directory = self.path_properties.temp_directory
        try:
            temp_directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise PathPropertiesError(f"cannot create {temp_directory}: {exc}") from exc

        try:
            self._extract()
            document_xml = temp_directory / DOCUMENT_XML_PATH
            if not document_xml.is_file():
                raise ContentFileNotFoundError(f"{DOCUMENT_XML_PATH} not found in {self.path_properties.last_path}")
            return self._parse(document_xml, rules_type)
        finally:
            if not self.settings.keep_extracted:
                shutil.rmtree(temp_directory, ignore_errors=True)
                logger.debug("reader.cleanup dir={}", temp_directory)

    def _extract(self) -> None:
        executable = Executable.unzip(
            [str(self.path_properties.path), DIRECTORY_FLAG, str(self.path_properties.temp_directory)],
            timeout=self.settings.unzip_timeout_seconds,
        )
        executable.execute()
        logger.info(
            "reader.extracted file={} dir={}",
            self.path_properties.last_path,
            self.path_properties.temp_directory,
        )

    def _parse[ItemT](
        self, document_xml: Path, rules_type: Callable[[], FormattingRules[ItemT]]
    ) -> list[ItemT] | None:
        try:
            xml_content = document_xml.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise MarkupParseError(f"{DOCUMENT_XML_PATH} is not valid UTF-8") from exc
        return DocxDocumentParser(rules_type).parse(xml_content)


def read_document[ItemT](
    path: str | Path,
    rules_type: Callable[[], FormattingRules[ItemT]],
    *,
    settings: Settings | None = None,
) -> list[ItemT] | None:
    """Select ``path`` and read it in one step."""
    settings = settings or get_settings()
    path_properties = select_document(path, settings.accepted_extensions, temp_root=settings.temp_root)
    return DocxDocumentReader(path_properties, settings=settings).generate(rules_type)
