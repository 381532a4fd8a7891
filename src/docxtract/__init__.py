"""docxtract - extract lightly formatted text from .docx documents."""

from .commands import CommandKind, RecognizedCommand
from .executable import Executable, OutputResult
from .parser import DocxDocumentParser
from .paths import PathProperties, select_document
from .reader import DocxDocumentReader, read_document
from .rules import FormattingRules, FragmentRules, HtmlRules, Style, StyledFragment

__version__ = "0.1.0"

__all__ = [
    "CommandKind",
    "DocxDocumentParser",
    "DocxDocumentReader",
    "Executable",
    "FormattingRules",
    "FragmentRules",
    "HtmlRules",
    "OutputResult",
    "PathProperties",
    "RecognizedCommand",
    "Style",
    "StyledFragment",
    "read_document",
    "select_document",
]
