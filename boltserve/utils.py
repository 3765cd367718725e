"""Path sanitising, URL decoding and file metadata helpers."""

from __future__ import annotations

import os
import re
import string
from dataclasses import dataclass
from email.utils import formatdate

from .constants import MAX_PATH_LENGTH, WEB_ROOT

_HEX_ESCAPE = re.compile(r"%([0-9A-Fa-f]{2})|\+")
_SEPARATORS = re.compile(r"[/\\]")
_SAFE_CHARS = frozenset(string.ascii_letters + string.digits + "-_. /\\")
_RESERVED_NAMES = (
    "CON", "PRN", "AUX", "NUL",
    "COM1", "COM2", "COM3", "COM4", "COM5", "COM6", "COM7", "COM8", "COM9",
    "LPT1", "LPT2", "LPT3", "LPT4", "LPT5", "LPT6", "LPT7", "LPT8", "LPT9",
)
_MAX_COMPONENTS = 64
_SIZE_UNITS = ("B", "KB", "MB", "GB", "TB")


class UnsafePathError(ValueError):
    """Raised when a request path cannot be mapped safely under the web root."""


@dataclass(frozen=True)
class FileInfo:
    """What is known about a file on disk."""

    exists: bool = False
    is_directory: bool = False
    size: int = 0
    mtime: int = 0


def url_decode(text: str) -> str:
    """Decode ``%XX`` escapes and turn ``+`` into spaces."""

    def replace(match: re.Match) -> str:
        hex_digits = match.group(1)
        return chr(int(hex_digits, 16)) if hex_digits else " "

    return _HEX_ESCAPE.sub(replace, text)


def _is_reserved(component: str) -> bool:
    for name in _RESERVED_NAMES:
        size = len(name)
        if component[:size].upper() == name and (
            len(component) == size or component[size] == "."
        ):
            return True
    return False


def _normalize(relative: str) -> list[str]:
    components = [part for part in _SEPARATORS.split(relative) if part]
    components = [part[: MAX_PATH_LENGTH - 1] for part in components[:_MAX_COMPONENTS]]
    resolved: list[str] = []
    for part in components:
        if part == ".":
            continue
        if part == "..":
            if not resolved:
                raise UnsafePathError("path escapes the web root")
            resolved.pop()
        else:
            resolved.append(part)
    return resolved


def sanitize_path(uri: str, web_root: str | None = None) -> str:
    """Map a request URI to a file path under ``web_root``.

    Raises UnsafePathError for traversal attempts, device names, unsafe
    characters, hidden files and over-long paths.
    """
    if not isinstance(uri, str):
        raise TypeError("uri must be a string")

    root = web_root or WEB_ROOT
    if len(root) >= MAX_PATH_LENGTH:
        raise UnsafePathError("web root too long")

    if uri in ("", "/"):
        return root

    if len(uri) >= MAX_PATH_LENGTH:
        raise UnsafePathError("path too long")
    if "%00" in uri:
        raise UnsafePathError("null byte in path")

    decoded = url_decode(uri)
    if "\x00" in decoded:
        raise UnsafePathError("null byte in path")
    if ".." in decoded:
        raise UnsafePathError("directory traversal")
    if "//" in decoded or "\\\\" in decoded:
        raise UnsafePathError("repeated separator")

    if any(_is_reserved(part) for part in _SEPARATORS.split(decoded) if part):
        raise UnsafePathError("reserved device name")

    relative = decoded[1:] if decoded.startswith("/") else decoded
    if any(char not in _SAFE_CHARS for char in relative):
        raise UnsafePathError("unsafe character in path")
    if relative.startswith("."):
        raise UnsafePathError("hidden file")
    if not relative:
        return root

    if len(root) + 1 + len(relative) >= MAX_PATH_LENGTH:
        raise UnsafePathError("path too long")

    parts = _normalize(relative)
    if len(root) + len(os.sep.join(parts)) >= MAX_PATH_LENGTH:
        raise UnsafePathError("path too long")
    return os.path.join(root, *parts) if parts else root


def get_file_info(path: str | os.PathLike | None) -> FileInfo:
    """Stat ``path``; a missing file gives a FileInfo with ``exists`` false."""
    if path is None:
        return FileInfo()
    try:
        st = os.stat(path)
    except OSError:
        return FileInfo()
    return FileInfo(
        exists=True,
        is_directory=os.path.isdir(path),
        size=st.st_size,
        mtime=int(st.st_mtime),
    )


def get_extension(path: str | None) -> str:
    """Return the extension of the last path component, without the dot."""
    if not path:
        return ""
    dot = path.rfind(".")
    if dot <= 0:
        return ""
    last_sep = max(path.rfind("/"), path.rfind("\\"))
    if last_sep >= 0 and dot < last_sep:
        return ""
    return path[dot + 1:]


def format_size(size: int) -> str:
    """Format a byte count for people, e.g. ``"1.5 KB"``."""
    display = float(size)
    unit_index = 0
    while display >= 1024.0 and unit_index < len(_SIZE_UNITS) - 1:
        display /= 1024.0
        unit_index += 1
    if unit_index == 0:
        return f"{size} {_SIZE_UNITS[0]}"
    return f"{display:.1f} {_SIZE_UNITS[unit_index]}"


def format_http_date(timestamp: float) -> str:
    """Format a Unix timestamp as an HTTP date, or ``""`` if out of range."""
    try:
        return formatdate(timestamp, usegmt=True)
    except (OverflowError, ValueError, OSError):
        return ""


def generate_etag(info: FileInfo) -> str:
    """Build a quoted ETag from a file's size and modification time."""
    return f'"{info.size:x}-{info.mtime & 0xFFFFFFFF:x}"'