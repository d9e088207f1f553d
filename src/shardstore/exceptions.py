# SPDX-License-Identifier: MIT
"""Exception types raised by the shardstore storage layer."""


class StoreError(Exception):
    """Base class for all store errors."""


class KeyNotFoundError(StoreError, FileNotFoundError):
    """No file is stored under the requested tenant and key."""


class StoreAccessError(StoreError):
    """The filesystem could not say whether a key exists (e.g. permission denied)."""


class InvalidKeyError(StoreError, ValueError):
    """Tenant id or key cannot be mapped to a path inside the store root."""


class StoreConfigError(StoreError, RuntimeError):
    """The store is missing a collaborator needed for the requested operation."""


class DecryptionError(StoreError):
    """The decrypt-and-copy primitive failed while writing plaintext."""
