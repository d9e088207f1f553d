# SPDX-License-Identifier: MIT
"""Path validation helpers that keep every store path inside its tenant root."""

from __future__ import annotations

import pathlib

from .exceptions import InvalidKeyError

_FORBIDDEN_SEGMENT_CHARS = ("/", "\\", "\x00")


def validate_segment(segment: str, what: str = "tenant id") -> str:
    """Validate a value that is used verbatim as a single path segment.

    Raises:
        InvalidKeyError: If the value is blank, a dot segment, or contains a separator.
    """
    if not segment or not segment.strip():
        raise InvalidKeyError(f"Invalid {what}: must not be empty")
    if segment in (".", ".."):
        raise InvalidKeyError(f"Invalid {what}: {segment!r}")
    if any(ch in segment for ch in _FORBIDDEN_SEGMENT_CHARS):
        raise InvalidKeyError(f"Invalid {what}: {segment!r} contains a path separator")
    return segment


def validate_within(base: pathlib.Path, relative: str) -> pathlib.Path:
    """Join *relative* onto *base* and reject anything that escapes *base*.

    Symlinks are not followed, so this works for paths that do not exist yet.

    Raises:
        InvalidKeyError: If the joined path is *base* itself or lies outside it.
    """
    parts = [p for p in relative.split("/") if p]
    if not parts:
        raise InvalidKeyError(f"Invalid key path: {relative!r} resolves to the tenant root")
    if any(p in (".", "..") or "\x00" in p for p in parts):
        raise InvalidKeyError(f"Invalid key path: path traversal detected in {relative!r}")
    return base.joinpath(*parts)
