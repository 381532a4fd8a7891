"""Selection of the document to extract."""

from __future__ import annotations

import tempfile
import uuid
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from docxtract.constants import DOCX_EXTENSION
from docxtract.errors import PathPropertiesError


@dataclass(frozen=True)
class PathProperties:
    """A selected document and the directory it will be extracted into.

    Two selections of the same file compare equal even though each one gets
    its own extraction directory.
    """

    last_path: str
    path: Path
    temp_directory: Path = field(compare=False)


def _normalize_extension(extension: str) -> str:
    return extension.strip().lstrip(".").lower()


def select_document(
    path: str | Path,
    accepted_extensions: Iterable[str] = (DOCX_EXTENSION,),
    *,
    temp_root: Path | None = None,
) -> PathProperties:
    """Validate ``path`` and allocate a unique extraction directory for it.

    The extraction directory is only named here; the reader creates it.
    """
    resolved = Path(path).expanduser().resolve()
    accepted = {_normalize_extension(item) for item in accepted_extensions if item.strip()}
    extension = _normalize_extension(resolved.suffix)
    if accepted and extension not in accepted:
        expected = ", ".join(sorted(accepted))
        raise PathPropertiesError(f"{resolved.name}: unsupported extension, expected one of: {expected}")
    if not resolved.is_file():
        raise PathPropertiesError(f"{resolved}: no such file")

    root = (temp_root or Path(tempfile.gettempdir())).expanduser()
    if root.exists() and not root.is_dir():
        raise PathPropertiesError(f"{root}: temporary root is not a directory")

    return PathProperties(
        last_path=resolved.name,
        path=resolved,
        temp_directory=root / uuid.uuid4().hex,
    )
