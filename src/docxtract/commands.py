"""Commands recognized by the execution engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class CommandKind(StrEnum):
    UNZIP = "unzip"
    BASH = "bash"
    SH = "sh"
    CUSTOM = "custom"


_KNOWN_PATHS: dict[CommandKind, str] = {
    CommandKind.UNZIP: "/usr/bin/unzip",
    CommandKind.BASH: "/bin/bash",
    CommandKind.SH: "/bin/sh",
}


@dataclass(frozen=True)
class RecognizedCommand:
    """One executable the engine knows how to launch.

    Recognized kinds resolve to a fixed absolute path. ``custom`` commands
    carry the caller's path and return it verbatim.
    """

    kind: CommandKind
    custom_path: str | None = None

    def __post_init__(self) -> None:
        if self.kind is CommandKind.CUSTOM:
            if self.custom_path is None:
                raise ValueError("custom command requires a path")
        elif self.custom_path is not None:
            raise ValueError(f"{self.kind} command does not take a custom path")

    @classmethod
    def unzip(cls) -> RecognizedCommand:
        return cls(CommandKind.UNZIP)

    @classmethod
    def bash(cls) -> RecognizedCommand:
        return cls(CommandKind.BASH)

    @classmethod
    def sh(cls) -> RecognizedCommand:
        return cls(CommandKind.SH)

    @classmethod
    def custom(cls, path: str) -> RecognizedCommand:
        return cls(CommandKind.CUSTOM, path)

    @classmethod
    def from_name(cls, name: str) -> RecognizedCommand:
        """Resolve a CLI-style name: a known kind, or anything else as a custom path."""
        try:
            kind = CommandKind(name)
        except ValueError:
            return cls.custom(name)
        if kind is CommandKind.CUSTOM:
            raise ValueError("use an executable path for custom commands")
        return cls(kind)

    @property
    def path(self) -> str:
        if self.kind is CommandKind.CUSTOM:
            return self.custom_path or ""
        return _KNOWN_PATHS[self.kind]

    def __str__(self) -> str:
        return self.path
