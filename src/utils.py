"""Shared path utilities for modgraph-core."""

from __future__ import annotations

import posixpath
from pathlib import PurePath

MODULE_ID_PREFIX = "module-"

_ID_ESCAPES = {"%": "%25", "-": "%2D", "~": "%7E"}


def normalize_path(file_path: str | PurePath) -> str:
    """Normalize a path to a canonical POSIX form.

    Args:
        file_path: Path string or PurePath object, absolute or relative

    Returns:
        Normalized path with forward slashes, no redundant separators,
        and no "." or resolvable ".." components.

    Examples:
        >>> normalize_path("/src/a/../b/./File.ts")
        '/src/b/File.ts'
        >>> normalize_path("src/domain/")
        'src/domain'
        >>> normalize_path("")
        '.'
    """
    path_str = file_path.as_posix() if isinstance(file_path, PurePath) else str(file_path)
    normalized = posixpath.normpath(path_str.replace("\\", "/"))

    # POSIX keeps a leading "//"; collapse it so both spellings share an id.
    if normalized.startswith("//"):
        normalized = "/" + normalized.lstrip("/")

    return normalized


def relative_parts(file_path: str, root_path: str) -> list[str] | None:
    """Return the path segments of file_path below root_path.

    Returns None when file_path does not live under root_path.
    """
    path = normalize_path(file_path)
    root = normalize_path(root_path)

    if root == ".":
        if path.startswith(("/", "../")) or path == "..":
            return None
        return [part for part in path.split("/") if part and part != "."]

    if path == root:
        return []

    prefix = root if root.endswith("/") else root + "/"
    if not path.startswith(prefix):
        return None

    return [part for part in path[len(prefix) :].split("/") if part]


def is_within(path: str, root_path: str) -> bool:
    """Return True when path equals root_path or lies below it."""
    return relative_parts(path, root_path) is not None


def module_id_for_path(module_path: str | PurePath) -> str:
    """Derive a stable module id from a module path.

    Path separators become "-"; literal "-", "%" and "~" characters are
    percent-escaped first, so distinct normalized paths never share an id.
    Relative paths carry a "~" marker to keep them apart from absolute ones.

    Examples:
        >>> module_id_for_path("/test/src/domain")
        'module-test-src-domain'
        >>> module_id_for_path("/test/src/my-lib")
        'module-test-src-my%2Dlib'
        >>> module_id_for_path("src/domain")
        'module-~src-domain'
    """
    normalized = normalize_path(module_path)
    is_absolute = normalized.startswith("/")

    parts = [part for part in normalized.split("/") if part]
    slug = "-".join(
        "".join(_ID_ESCAPES.get(char, char) for char in part) for part in parts
    )

    marker = "" if is_absolute else "~"
    return f"{MODULE_ID_PREFIX}{marker}{slug}"


def module_name_for_path(module_path: str | PurePath) -> str:
    """Return the display name of a module: the base component of its path."""
    normalized = normalize_path(module_path)
    name = posixpath.basename(normalized)
    return name or normalized
