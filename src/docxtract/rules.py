"""Formatting rule policies used by the document parser."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from enum import StrEnum
from typing import ClassVar, Protocol

from pydantic import BaseModel, ConfigDict, Field

from docxtract.constants import BOLD_TAG, ITALIC_TAG, UNDERLINE_TAG


class FormattingRules[ItemT](Protocol):
    """Contract between the parser and a formatting policy.

    The parser calls ``apply_tag`` for every element start, ``transform`` once
    per closed text node and ``reset`` at every run boundary. Items recorded by
    ``transform`` are exposed through ``result`` in document order.
    """

    @property
    def result(self) -> list[ItemT] | None: ...

    def apply_tag(self, name: str) -> None: ...

    def transform(self, text: str) -> str: ...

    def reset(self) -> None: ...


class Style(StrEnum):
    BOLD = "bold"
    ITALIC = "italic"
    UNDERLINE = "underline"


class StyledFragment(BaseModel):
    """Text of one text node with the styles active when it closed."""

    model_config = ConfigDict(frozen=True)

    text: str
    styles: frozenset[Style] = Field(default_factory=frozenset)

    @property
    def bold(self) -> bool:
        return Style.BOLD in self.styles

    @property
    def italic(self) -> bool:
        return Style.ITALIC in self.styles

    @property
    def underline(self) -> bool:
        return Style.UNDERLINE in self.styles


class StyleRules[ItemT](ABC):
    """Bold/italic/underline tracking shared by the built-in policies.

    Subclasses decide how text is rendered and what item is recorded.
    """

    STYLE_TAGS: ClassVar[Mapping[str, Style]] = {
        BOLD_TAG: Style.BOLD,
        ITALIC_TAG: Style.ITALIC,
        UNDERLINE_TAG: Style.UNDERLINE,
    }

    def __init__(self) -> None:
        self._active: set[Style] = set()
        self._result: list[ItemT] = []

    @property
    def result(self) -> list[ItemT] | None:
        return self._result

    @property
    def active_styles(self) -> frozenset[Style]:
        return frozenset(self._active)

    def apply_tag(self, name: str) -> None:
        style = self.STYLE_TAGS.get(name)
        if style is not None:
            self._active.add(style)

    def transform(self, text: str) -> str:
        styles = self.active_styles
        rendered = self.render(text, styles)
        self._result.append(self.make_item(text, rendered, styles))
        return rendered

    def reset(self) -> None:
        self._active.clear()

    @abstractmethod
    def render(self, text: str, styles: frozenset[Style]) -> str: ...

    @abstractmethod
    def make_item(self, text: str, rendered: str, styles: frozenset[Style]) -> ItemT: ...


class FragmentRules(StyleRules[StyledFragment]):
    """Record each text node as a :class:`StyledFragment`."""

    def render(self, text: str, styles: frozenset[Style]) -> str:
        return text

    def make_item(self, text: str, rendered: str, styles: frozenset[Style]) -> StyledFragment:
        return StyledFragment(text=text, styles=styles)


_HTML_TAGS: tuple[tuple[Style, str], ...] = (
    (Style.BOLD, "b"),
    (Style.ITALIC, "i"),
    (Style.UNDERLINE, "u"),
)


class HtmlRules(StyleRules[str]):
    """Record each text node as HTML-like markup, e.g. ``<b><i>text</i></b>``."""

    def render(self, text: str, styles: frozenset[Style]) -> str:
        if not text:
            return text
        for style, tag in reversed(_HTML_TAGS):
            if style in styles:
                text = f"<{tag}>{text}</{tag}>"
        return text

    def make_item(self, text: str, rendered: str, styles: frozenset[Style]) -> str:
        return rendered
