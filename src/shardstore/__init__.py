# SPDX-License-Identifier: MIT
"""shardstore: deterministic key-to-path storage with pluggable sharding."""

from .exceptions import (
    DecryptionError,
    InvalidKeyError,
    KeyNotFoundError,
    StoreAccessError,
    StoreConfigError,
    StoreError,
)
from .pathkey import PathKey, PathTransformFunc, cas_path_transform, default_path_transform
from .storage import FileInfo, LocalStore, Store, StoreOpts, create_store, get_store

__all__ = [
    "DecryptionError",
    "FileInfo",
    "InvalidKeyError",
    "KeyNotFoundError",
    "LocalStore",
    "PathKey",
    "PathTransformFunc",
    "Store",
    "StoreAccessError",
    "StoreConfigError",
    "StoreError",
    "StoreOpts",
    "cas_path_transform",
    "create_store",
    "default_path_transform",
    "get_store",
]
