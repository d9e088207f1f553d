# SPDX-License-Identifier: MIT
"""Logical key to physical path decomposition.

A :class:`PathKey` splits a key into a directory ``pathname`` and a terminal
``filename``.  Path transforms are plain functions ``str -> PathKey``; two are
built in:

- :func:`default_path_transform` keeps the key as-is (``<key>/<key>``).
- :func:`cas_path_transform` shards the SHA-1 hex digest of the key into
  eight 5-character directories and names the file after the full digest.
"""

from __future__ import annotations

import hashlib
from collections.abc import Callable
from dataclasses import dataclass

BLOCK_SIZE = 5
"""Number of hex characters per shard directory in the CAS layout."""


@dataclass(frozen=True)
class PathKey:
    """Directory path and filename derived from a single key."""

    pathname: str
    filename: str

    def first_path_name(self) -> str:
        """Return the top-level directory segment (the delete boundary)."""
        return self.pathname.split("/")[0]

    def full_path(self) -> str:
        return f"/{self.pathname}/{self.filename}"


PathTransformFunc = Callable[[str], PathKey]


def default_path_transform(key: str) -> PathKey:
    """Identity transform: the key is both the directory and the filename."""
    return PathKey(pathname=key, filename=key)


def cas_path_transform(key: str) -> PathKey:
    """Content-hash transform over the key string.

    Examples::

        >>> cas_path_transform("momsbestpicture").pathname
        '68044/29f74/181a6/3c50c/3d81d/733a1/2f14a/353ff'
    """
    digest = hashlib.sha1(key.encode("utf-8")).hexdigest()
    segments = [digest[i : i + BLOCK_SIZE] for i in range(0, len(digest), BLOCK_SIZE)]
    return PathKey(pathname="/".join(segments), filename=digest)


PATH_TRANSFORMS: dict[str, PathTransformFunc] = {
    "identity": default_path_transform,
    "cas": cas_path_transform,
}
"""Built-in transforms by configuration name."""
