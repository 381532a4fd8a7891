"""Event-driven parser for WordprocessingML content."""

from __future__ import annotations

import xml.sax
from collections.abc import Callable
from enum import StrEnum
from xml.sax.handler import ContentHandler
from xml.sax.xmlreader import AttributesImpl

from loguru import logger

from docxtract.constants import RUN_TAG, TEXT_TAG
from docxtract.errors import MarkupParseError
from docxtract.rules import FormattingRules


class ParserState(StrEnum):
    IDLE = "idle"
    IN_TEXT_NODE = "in_text_node"


class _MarkupHandler[ItemT](ContentHandler):
    def __init__(self, rules: FormattingRules[ItemT], *, text_tag: str, run_tag: str) -> None:
        super().__init__()
        self.rules = rules
        self.state = ParserState.IDLE
        self._text_tag = text_tag
        self._run_tag = run_tag
        self._buffer: list[str] = []

    def startElement(self, name: str, attrs: AttributesImpl) -> None:  # noqa: N802
        # Style tags may sit inside or beside the text tag; every start reaches the rules.
        self.rules.apply_tag(name)
        if name == self._text_tag:
            self.state = ParserState.IN_TEXT_NODE
            self._buffer = []

    def characters(self, content: str) -> None:
        if self.state is ParserState.IN_TEXT_NODE:
            self._buffer.append(content)

    def endElement(self, name: str) -> None:  # noqa: N802
        if name == self._text_tag and self.state is ParserState.IN_TEXT_NODE:
            self.rules.transform("".join(self._buffer).strip())
            self._buffer = []
            self.state = ParserState.IDLE
        if name == self._run_tag:
            self.rules.reset()


class DocxDocumentParser[ItemT]:
    """Turn document markup into the items produced by a formatting policy.

    A fresh policy is built from ``rules_type`` for every :meth:`parse` call,
    so style state never carries over between documents. One parser instance
    must not be used by several threads at once.
    """

    def __init__(
        self,
        rules_type: Callable[[], FormattingRules[ItemT]],
        *,
        text_tag: str = TEXT_TAG,
        run_tag: str = RUN_TAG,
    ) -> None:
        self.rules_type = rules_type
        self.text_tag = text_tag
        self.run_tag = run_tag

    def parse(self, xml_content: str | bytes) -> list[ItemT] | None:
        rules = self.rules_type()
        handler = _MarkupHandler(rules, text_tag=self.text_tag, run_tag=self.run_tag)
        try:
            xml.sax.parseString(xml_content, handler)
        except xml.sax.SAXParseException as exc:
            raise MarkupParseError(f"invalid document markup: {exc}") from exc

        result = rules.result
        logger.debug("parser.done items={}", len(result) if result else 0)
        return result
