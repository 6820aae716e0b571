"""Hash-gated writes for generated files.

Every generated file except the bootstrap module starts with a header
line carrying the CRC-32 of the content below it:

    // hash:2914311032

When the header of an existing file matches the checksum of the new
content the file is left alone, so re-running the generator against an
unchanged schema does not touch the output directory.
"""

import zlib
from enum import Enum
from pathlib import Path

from .errors import OutputWriteError

EMBEDDED_HASH_PREFIX = "// hash:"


class FileWriteResult(Enum):
    """Outcome of writing one generated file."""
    CREATED = "created"
    OVERWRITTEN = "overwritten"
    NO_CHANGE = "skipped (no change)"
    EXISTS = "already exists"


def content_hash(content: str) -> int:
    """Return the CRC-32 checksum of `content` encoded as UTF-8."""
    return zlib.crc32(content.encode("utf-8"))


def hash_header(checksum: int) -> str:
    return f"{EMBEDDED_HASH_PREFIX}{checksum}"


def read_embedded_hash(path: Path) -> int | None:
    """Read the checksum from the first line of `path`, if it has one."""
    try:
        with open(path, encoding="utf-8", errors="replace", newline="") as f:
            first_line = f.readline()
    except OSError as e:
        raise OutputWriteError("Unable to read hash from", path, e) from e

    if not first_line.startswith(EMBEDDED_HASH_PREFIX):
        return None
    value = first_line[len(EMBEDDED_HASH_PREFIX):].rstrip()
    if not (value.isascii() and value.isdigit()):
        return None
    return int(value)


def _write(path: Path, text: str, mode: str, action: str):
    try:
        # newline="" keeps the configured line terminator byte-for-byte
        with open(path, mode, encoding="utf-8", newline="") as f:
            f.write(text)
    except OSError as e:
        raise OutputWriteError(action, path, e) from e


def overwrite_on_diff(path: Path, content: str, line_break: str = "\n") -> FileWriteResult:
    """Write `content` under a hash header unless the file already matches.

    Args:
        path: Target file
        content: Generated content, without the header
        line_break: Line terminator placed after the header

    Returns:
        CREATED, OVERWRITTEN or NO_CHANGE
    """
    path = Path(path)
    checksum = content_hash(content)
    text = hash_header(checksum) + line_break + content

    if not path.exists():
        _write(path, text, "x", "Unable to create file")
        return FileWriteResult.CREATED

    if read_embedded_hash(path) == checksum:
        return FileWriteResult.NO_CHANGE

    _write(path, text, "w", "Unable to write to file")
    return FileWriteResult.OVERWRITTEN


def write_once(path: Path, content: str) -> FileWriteResult:
    """Create `path` with `content` only if it does not exist yet.

    The file carries no hash header and is never overwritten.
    """
    path = Path(path)
    if path.exists():
        return FileWriteResult.EXISTS
    try:
        with open(path, "x", encoding="utf-8", newline="") as f:
            f.write(content)
    except FileExistsError:
        return FileWriteResult.EXISTS
    except OSError as e:
        raise OutputWriteError("Unable to create new file", path, e) from e
    return FileWriteResult.CREATED


def ensure_directory(path: Path):
    """Create the output directory (and parents) if missing."""
    path = Path(path)
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OutputWriteError("Unable to create output directory", path, e) from e
