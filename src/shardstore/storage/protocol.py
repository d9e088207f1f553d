# SPDX-License-Identifier: MIT
"""Store protocol, configuration and shared types.

Defines the interface that every tenant-scoped key store implements, plus
the collaborator signature for decrypt-while-writing.
"""

from __future__ import annotations

import os
import pathlib
from collections.abc import AsyncIterable, Awaitable, Callable
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass
from typing import Any, Protocol, Union, runtime_checkable

from pydantic import BaseModel, field_validator

from ..pathkey import PathTransformFunc, default_path_transform


class SupportsRead(Protocol):
    def read(self, size: int = ..., /) -> bytes: ...


class SupportsAsyncRead(Protocol):
    async def read(self, size: int = ..., /) -> bytes: ...


ByteSource = Union[bytes, bytearray, memoryview, AsyncIterable[bytes], SupportsRead, SupportsAsyncRead]
"""Raw bytes, an async iterable of chunks, or a (sync or async) file-like object with ``read(n)``."""

CopyDecryptFunc = Callable[[bytes, AsyncIterable[bytes], Any], Awaitable[int]]
"""``(enc_key, ciphertext_chunks, dest) -> plaintext bytes written``.

*dest* is an open ``aiofiles`` binary handle; the function writes plaintext
into it and must not close it.
"""


@dataclass(frozen=True)
class FileInfo:
    """Metadata about a stored key."""

    name: str
    size_bytes: int
    modified_timestamp: float


class StoreOpts(BaseModel, frozen=True):
    """Immutable store configuration.

    ``root`` is an explicit filesystem path, validated on construction.  It
    may not exist yet, but if it does it must be a real directory.
    """

    root: pathlib.Path
    path_transform: PathTransformFunc = default_path_transform
    copy_decrypt: CopyDecryptFunc | None = None

    @field_validator("root", mode="before")
    @classmethod
    def _validate_root(cls, v: Any) -> pathlib.Path:
        if not isinstance(v, (str, os.PathLike)):
            raise ValueError(f"Store root must be a path, got {type(v).__name__}")
        if isinstance(v, str) and not v.strip():
            raise ValueError("Store root must not be empty")
        original = pathlib.Path(v)
        try:
            if original.is_symlink():
                raise ValueError(f"Store root cannot be a symbolic link: {v}")
            path = original.resolve()
            if path.exists() and not path.is_dir():
                raise ValueError(f"Store root is not a directory: {path}")
        except OSError as e:
            raise ValueError(f"Cannot validate store root: permission denied or unreadable path {v}: {e}") from e
        return path


@runtime_checkable
class Store(Protocol):
    """Protocol for tenant-scoped, key-addressed file storage.

    Every operation takes a tenant id (used verbatim as a directory) and a
    logical key (mapped to a path by the configured transform).
    """

    async def has(self, tenant_id: str, key: str) -> bool:
        """Report whether a file is stored for the key.

        Raises:
            StoreAccessError: If the filesystem cannot answer (e.g. permission denied).
        """
        ...

    async def stat(self, tenant_id: str, key: str) -> FileInfo:
        """Get metadata for a stored key.

        Raises:
            KeyNotFoundError: If nothing is stored for the key.
        """
        ...

    def resolve_path(self, tenant_id: str, key: str) -> pathlib.Path:
        """Absolute path the key's payload is stored at (whether or not it exists)."""
        ...

    async def write(self, tenant_id: str, key: str, source: ByteSource) -> int:
        """Stream *source* into the key's file, replacing any previous content.

        Returns:
            Number of bytes written.
        """
        ...

    def read(self, tenant_id: str, key: str) -> AbstractAsyncContextManager[tuple[int, Any]]:
        """Return a context manager yielding ``(size, stream)`` for the key.

        The stream is closed when the context exits.

        Raises:
            KeyNotFoundError: If nothing is stored for the key.
        """
        ...

    async def read_bytes(self, tenant_id: str, key: str) -> bytes:
        """Read the entire payload stored for the key."""
        ...

    async def delete(self, tenant_id: str, key: str) -> None:
        """Remove the key's top-level directory bucket; missing buckets are ignored."""
        ...

    async def write_decrypt(self, enc_key: bytes, tenant_id: str, key: str, source: ByteSource) -> int:
        """Like :meth:`write`, but decrypts *source* on the way to disk.

        Returns:
            Number of plaintext bytes written.
        """
        ...
