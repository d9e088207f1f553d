# SPDX-License-Identifier: MIT
"""Tenant-scoped key store for shardstore.

Usage::

    from shardstore.storage import get_store

    store = get_store()
    await store.write("tenant-a", "photo.jpg", data)
    async with store.read("tenant-a", "photo.jpg") as (size, stream):
        payload = await stream.read()
"""

from .factory import create_store, get_store
from .local import LocalStore
from .protocol import ByteSource, CopyDecryptFunc, FileInfo, Store, StoreOpts

__all__ = [
    "ByteSource",
    "CopyDecryptFunc",
    "FileInfo",
    "LocalStore",
    "Store",
    "StoreOpts",
    "create_store",
    "get_store",
]
