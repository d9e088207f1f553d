# SPDX-License-Identifier: MIT
"""Configuration management for shardstore.

This module handles:
- Logging setup
- Storage root resolution and validation
- Path transform selection
"""

import logging
import os
import pathlib
import sys
from functools import lru_cache

from .pathkey import PATH_TRANSFORMS, PathTransformFunc

# ---------- Logging configuration ----------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger("shardstore")

DEFAULT_ROOT_FOLDER_NAME = "ssnetwork"
DEFAULT_PATH_TRANSFORM = "identity"


# ---------- Storage root (runtime) ----------
@lru_cache(maxsize=1)
def get_root() -> pathlib.Path:
    """Get and validate the storage root from ``SHARDSTORE_ROOT``.

    Falls back to ``./ssnetwork`` when the variable is unset or blank.  The
    directory does not need to exist yet; it is created on first write.

    Returns:
        Validated absolute path

    Raises:
        RuntimeError: If the path is malformed, is a symlink, or exists but isn't a directory
    """
    root_str = os.getenv("SHARDSTORE_ROOT", "").strip() or DEFAULT_ROOT_FOLDER_NAME

    try:
        path = pathlib.Path(root_str).resolve()
    except (ValueError, OSError) as e:
        raise RuntimeError(f"Invalid SHARDSTORE_ROOT '{root_str}': {e}") from e

    # Check the original path before resolution to catch symlinks
    original_path = pathlib.Path(root_str)
    try:
        if original_path.is_symlink():
            raise RuntimeError(f"SHARDSTORE_ROOT cannot be a symbolic link: {root_str}")
    except PermissionError as e:
        raise RuntimeError(f"Cannot validate SHARDSTORE_ROOT: permission denied for {root_str}") from e

    if path.exists() and not path.is_dir():
        raise RuntimeError(f"SHARDSTORE_ROOT is not a directory: {path}")

    return path


def get_path_transform() -> PathTransformFunc:
    """Resolve ``SHARDSTORE_PATH_TRANSFORM`` (``identity`` or ``cas``).

    Raises:
        RuntimeError: If the configured name is unknown
    """
    name = os.getenv("SHARDSTORE_PATH_TRANSFORM", "").strip().lower() or DEFAULT_PATH_TRANSFORM
    try:
        return PATH_TRANSFORMS[name]
    except KeyError:
        choices = ", ".join(sorted(PATH_TRANSFORMS))
        raise RuntimeError(f"Unknown SHARDSTORE_PATH_TRANSFORM: {name!r}. Use one of: {choices}") from None
