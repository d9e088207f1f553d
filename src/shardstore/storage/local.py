# SPDX-License-Identifier: MIT
"""Local filesystem store.

Physical layout::

    <root>/<tenant_id>/<pathname>/<filename>

where ``pathname`` and ``filename`` come from the configured path transform.
With :func:`~shardstore.pathkey.cas_path_transform` that is eight 5-char hex
shard directories followed by the 40-char SHA-1 digest of the key.
"""

from __future__ import annotations

import inspect
import logging
import os
import pathlib
import shutil
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from functools import partial
from typing import Any

import aiofiles
import aiofiles.os
import anyio

from ..exceptions import (
    DecryptionError,
    InvalidKeyError,
    KeyNotFoundError,
    StoreAccessError,
    StoreConfigError,
)
from ..pathkey import PathKey
from ..security import validate_segment, validate_within
from .protocol import ByteSource, FileInfo, StoreOpts

logger = logging.getLogger("shardstore")

CHUNK_SIZE = 64 * 1024


async def iter_chunks(source: ByteSource, chunk_size: int = CHUNK_SIZE) -> AsyncIterator[bytes]:
    """Adapt any supported byte source to an async iterator of chunks."""
    if isinstance(source, (bytes, bytearray, memoryview)):
        view = memoryview(source)
        for start in range(0, len(view), chunk_size):
            yield bytes(view[start : start + chunk_size])
        return

    # File-likes first: aiofiles handles are also async-iterable, but line by line
    read = getattr(source, "read", None)
    if read is not None:
        while True:
            if inspect.iscoroutinefunction(read):
                chunk = await read(chunk_size)
            else:
                chunk = await anyio.to_thread.run_sync(read, chunk_size)
            if not chunk:
                return
            yield chunk

    if hasattr(source, "__aiter__"):
        async for chunk in source:
            yield chunk
        return

    raise TypeError(f"Unsupported byte source: {type(source).__name__}")


def _remove_all(path: pathlib.Path) -> None:
    """Recursively remove *path*; a missing path is not an error."""
    try:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink()
    except (FileNotFoundError, NotADirectoryError):
        pass


class LocalStore:
    """Tenant-scoped key store on local disk.

    Args:
        opts: Store configuration.  The root and path transform are fixed
            for the lifetime of the store.
    """

    def __init__(self, opts: StoreOpts) -> None:
        self._opts = opts

    @property
    def opts(self) -> StoreOpts:
        return self._opts

    @property
    def root(self) -> pathlib.Path:
        return self._opts.root

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _tenant_dir(self, tenant_id: str) -> pathlib.Path:
        return self._opts.root / validate_segment(tenant_id)

    def _resolve(self, tenant_id: str, key: str) -> tuple[PathKey, pathlib.Path]:
        path_key = self._opts.path_transform(key)
        if not path_key.filename.strip("/"):
            raise InvalidKeyError(f"Invalid key {key!r}: transform produced an empty filename")
        full_path = validate_within(self._tenant_dir(tenant_id), path_key.full_path())
        return path_key, full_path

    @asynccontextmanager
    async def _open_for_writing(self, tenant_id: str, key: str) -> AsyncIterator[Any]:
        """Yield a temp file beside the target; it replaces the target only if the block succeeds."""
        _, file_path = self._resolve(tenant_id, key)
        await anyio.to_thread.run_sync(partial(file_path.parent.mkdir, parents=True, exist_ok=True))
        tmp_path = file_path.with_name(f".{file_path.name}.{uuid.uuid4().hex}.tmp")
        committed = False
        try:
            async with aiofiles.open(tmp_path, "wb") as f:
                yield f
            await aiofiles.os.replace(tmp_path, file_path)
            committed = True
        finally:
            if not committed:
                tmp_path.unlink(missing_ok=True)

    # ------------------------------------------------------------------
    # Existence / metadata
    # ------------------------------------------------------------------

    async def has(self, tenant_id: str, key: str) -> bool:
        _, file_path = self._resolve(tenant_id, key)
        try:
            await aiofiles.os.stat(file_path)
        except (FileNotFoundError, NotADirectoryError):
            return False
        except OSError as e:
            raise StoreAccessError(f"Cannot determine whether {key!r} exists for tenant {tenant_id!r}: {e}") from e
        return True

    async def stat(self, tenant_id: str, key: str) -> FileInfo:
        path_key, file_path = self._resolve(tenant_id, key)
        try:
            st = await aiofiles.os.stat(file_path)
        except (FileNotFoundError, NotADirectoryError) as e:
            raise KeyNotFoundError(f"Key not found: {key!r} (tenant {tenant_id!r})") from e
        return FileInfo(name=path_key.filename, size_bytes=st.st_size, modified_timestamp=st.st_mtime)

    def resolve_path(self, tenant_id: str, key: str) -> pathlib.Path:
        """Absolute path the key's payload is stored at (whether or not it exists)."""
        return self._resolve(tenant_id, key)[1]

    # ------------------------------------------------------------------
    # Streaming I/O
    # ------------------------------------------------------------------

    async def write(self, tenant_id: str, key: str, source: ByteSource) -> int:
        written = 0
        async with self._open_for_writing(tenant_id, key) as f:
            async for chunk in iter_chunks(source):
                await f.write(chunk)
                written += len(chunk)
        logger.debug("Wrote %d bytes for tenant %s key %r", written, tenant_id, key)
        return written

    @asynccontextmanager
    async def read(self, tenant_id: str, key: str) -> AsyncIterator[tuple[int, Any]]:
        """Yield ``(size, stream)`` for the stored payload.

        The stream is an ``aiofiles`` binary reader that is closed when the
        ``async with`` block exits.
        """
        _, file_path = self._resolve(tenant_id, key)
        try:
            f = await aiofiles.open(file_path, "rb")
        except (FileNotFoundError, NotADirectoryError) as e:
            raise KeyNotFoundError(f"Key not found: {key!r} (tenant {tenant_id!r})") from e
        try:
            st = await anyio.to_thread.run_sync(os.fstat, f.fileno())
            logger.debug("Reading %d bytes for tenant %s key %r", st.st_size, tenant_id, key)
            yield st.st_size, f
        finally:
            await f.close()

    async def read_bytes(self, tenant_id: str, key: str) -> bytes:
        async with self.read(tenant_id, key) as (_, f):
            return await f.read()

    async def delete(self, tenant_id: str, key: str) -> None:
        """Remove the key's top-level directory bucket under the tenant.

        .. warning::

            Deletion removes ``<root>/<tenant_id>/<first path segment>``
            recursively, not just the key's file.  With the CAS transform
            that is the whole 5-hex-char shard, so every other key of the
            tenant whose digest shares the same prefix is deleted as well.
        """
        path_key, _ = self._resolve(tenant_id, key)
        bucket = validate_within(self._tenant_dir(tenant_id), path_key.first_path_name())
        await anyio.to_thread.run_sync(_remove_all, bucket)
        logger.info("deleted [%s] from disk", path_key.filename)

    async def write_decrypt(self, enc_key: bytes, tenant_id: str, key: str, source: ByteSource) -> int:
        """Write the plaintext of *source* using the configured ``copy_decrypt``.

        Raises:
            StoreConfigError: If no decrypt primitive is configured.
            DecryptionError: If the primitive fails for a reason other than I/O.
        """
        copy_decrypt = self._opts.copy_decrypt
        if copy_decrypt is None:
            raise StoreConfigError("write_decrypt requires StoreOpts.copy_decrypt to be configured")

        async with self._open_for_writing(tenant_id, key) as f:
            try:
                written = await copy_decrypt(enc_key, iter_chunks(source), f)
            except OSError:
                raise
            except Exception as e:
                raise DecryptionError(f"Failed to decrypt payload for {key!r} (tenant {tenant_id!r}): {e}") from e
        logger.debug("Wrote %d decrypted bytes for tenant %s key %r", written, tenant_id, key)
        return int(written)
