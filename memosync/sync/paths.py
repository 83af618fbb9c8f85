"""Deterministic vault paths and file names for the mirror tree.

Everything here is pure: no I/O, no clock, no configuration lookups.
"""

import re
from datetime import datetime
from typing import Literal

from memosync.memos.types import MemoItem, MemoResource

IMAGE_EXTENSIONS = {"jpg", "jpeg", "png", "gif", "bmp", "webp"}
PREVIEW_LENGTH = 50
RESOURCES_DIRNAME = "resources"

_RESERVED_CHARS = re.compile(r'[\\/:*?"<>|#]')
_WHITESPACE = re.compile(r"\s+")


def format_datetime(dt: datetime, style: Literal["filename", "display"] = "display") -> str:
    """
    Format a timestamp from its own wall-clock fields.

    ``filename`` gives ``YYYY-MM-DD HH-MM``; ``display`` gives
    ``YYYY-MM-DD HH:MM:SS``.
    """
    if style == "filename":
        return dt.strftime("%Y-%m-%d %H-%M")
    return dt.strftime("%Y-%m-%d %H:%M:%S")


def sanitize_file_name(name: str) -> str:
    """Replace filesystem-reserved characters and ``#``, squeeze whitespace."""
    name = _RESERVED_CHARS.sub("_", name)
    name = _WHITESPACE.sub(" ", name)
    return name.strip()


def join_vault_path(*parts: str) -> str:
    """Join vault path segments, dropping empty ones and stray slashes."""
    return "/".join(p.strip("/") for p in parts if p.strip("/"))


def year_directory(root: str, created: datetime) -> str:
    return join_vault_path(root, f"{created.year:04d}")


def month_directory(root: str, created: datetime) -> str:
    """``{root}/{YYYY}/{MM}`` for a creation timestamp; an empty root means the vault root."""
    return join_vault_path(year_directory(root, created), f"{created.month:02d}")


def memo_file_name(memo: MemoItem) -> str:
    """Content preview plus creation minute, e.g. ``Hello world (2024-03-15 10-30).md``."""
    if memo.content:
        preview = sanitize_file_name(memo.content[:PREVIEW_LENGTH])
    else:
        preview = sanitize_file_name(memo.name.replace("memos/", "", 1))

    stamp = format_datetime(memo.create_time, "filename")
    return sanitize_file_name(f"{preview} ({stamp}).md")


def resource_file_name(resource: MemoResource) -> str:
    """``{shortId}_{filename}``; the id prefix keeps same-named uploads apart."""
    return f"{resource.short_id}_{sanitize_file_name(resource.filename)}"


def resource_directory(month_dir: str) -> str:
    return f"{month_dir}/{RESOURCES_DIRNAME}"


def is_image_file(filename: str) -> bool:
    """True if the extension is one of IMAGE_EXTENSIONS (case-insensitive)."""
    if "." not in filename:
        return False
    return filename.rsplit(".", 1)[-1].lower() in IMAGE_EXTENSIONS


def relative_path(from_path: str, to_path: str) -> str:
    """
    Link from the file ``from_path`` to ``to_path``.

    Both are vault paths. The result resolves against the directory that
    holds ``from_path``.

    Example:
        >>> relative_path("memos/2024/05/note.md", "memos/2024/04/resources/a.png")
        '../04/resources/a.png'
    """
    from_parts = from_path.split("/")[:-1]
    to_parts = to_path.split("/")

    common = 0
    while (
        common < len(from_parts)
        and common < len(to_parts)
        and from_parts[common] == to_parts[common]
    ):
        common += 1

    up = [".."] * (len(from_parts) - common)
    return "/".join(up + to_parts[common:])
