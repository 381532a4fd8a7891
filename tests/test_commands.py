import pytest

from docxtract.commands import CommandKind, RecognizedCommand


@pytest.mark.parametrize(
    ("command", "expected"),
    [
        (RecognizedCommand.unzip(), "/usr/bin/unzip"),
        (RecognizedCommand.bash(), "/bin/bash"),
        (RecognizedCommand.sh(), "/bin/sh"),
    ],
)
def test_recognized_commands_resolve_to_fixed_paths(command: RecognizedCommand, expected: str) -> None:
    assert command.path == expected
    assert str(command) == expected


def test_custom_command_returns_path_verbatim() -> None:
    command = RecognizedCommand.custom("./tools/my unzip")
    assert command.kind is CommandKind.CUSTOM
    assert command.path == "./tools/my unzip"


def test_commands_compare_by_value() -> None:
    assert RecognizedCommand.unzip() == RecognizedCommand.unzip()
    assert RecognizedCommand.custom("/bin/true") == RecognizedCommand.custom("/bin/true")
    assert RecognizedCommand.custom("/bin/true") != RecognizedCommand.custom("/bin/false")
    assert RecognizedCommand.sh() != RecognizedCommand.bash()


def test_custom_command_keeps_empty_path_verbatim() -> None:
    assert RecognizedCommand.custom("").path == ""


def test_custom_command_requires_path() -> None:
    with pytest.raises(ValueError):
        RecognizedCommand(CommandKind.CUSTOM)


def test_known_command_rejects_custom_path() -> None:
    with pytest.raises(ValueError):
        RecognizedCommand(CommandKind.SH, "/bin/zsh")


def test_from_name_resolves_known_kinds_and_paths() -> None:
    assert RecognizedCommand.from_name("unzip") == RecognizedCommand.unzip()
    assert RecognizedCommand.from_name("sh") == RecognizedCommand.sh()
    assert RecognizedCommand.from_name("/usr/bin/env") == RecognizedCommand.custom("/usr/bin/env")
    with pytest.raises(ValueError):
        RecognizedCommand.from_name("custom")
