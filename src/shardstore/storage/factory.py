# SPDX-License-Identifier: MIT
"""Store factory.

Builds the process-wide :class:`LocalStore` from ``SHARDSTORE_ROOT`` and
``SHARDSTORE_PATH_TRANSFORM``.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from ..config import get_path_transform, get_root
from ..pathkey import PATH_TRANSFORMS
from .local import LocalStore
from .protocol import CopyDecryptFunc, Store, StoreOpts

logger = logging.getLogger("shardstore")


def create_store(
    root: str | None = None,
    transform: str | None = None,
    copy_decrypt: CopyDecryptFunc | None = None,
) -> LocalStore:
    """Build a new store, falling back to environment configuration.

    Args:
        root: Storage root.  Defaults to ``get_root()``.
        transform: Transform name (``identity`` or ``cas``).  Defaults to
            ``SHARDSTORE_PATH_TRANSFORM``.
        copy_decrypt: Decrypt-and-copy primitive for ``write_decrypt``.
    """
    if transform is None:
        path_transform = get_path_transform()
    elif transform in PATH_TRANSFORMS:
        path_transform = PATH_TRANSFORMS[transform]
    else:
        raise RuntimeError(f"Unknown path transform: {transform!r}. Use one of: {', '.join(sorted(PATH_TRANSFORMS))}")

    opts = StoreOpts(
        root=root if root is not None else get_root(),
        path_transform=path_transform,
        copy_decrypt=copy_decrypt,
    )
    logger.debug("Created store at %s (transform=%s)", opts.root, path_transform.__name__)
    return LocalStore(opts)


@lru_cache(maxsize=1)
def get_store() -> Store:
    """Return the environment-configured :class:`Store` (cached singleton).

    Configuration
    -------------
    ``SHARDSTORE_ROOT``
        Storage root directory (default ``./ssnetwork``).
    ``SHARDSTORE_PATH_TRANSFORM``
        ``"identity"`` (default) or ``"cas"``.
    """
    return create_store()
