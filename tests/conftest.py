# SPDX-License-Identifier: MIT
"""Shared pytest fixtures for shardstore tests."""

import pathlib
from collections.abc import AsyncIterable

import pytest

from shardstore.pathkey import cas_path_transform
from shardstore.storage import LocalStore, StoreOpts


def xor_bytes(data: bytes, key: bytes, offset: int = 0) -> bytes:
    """Repeating-key XOR; its own inverse."""
    return bytes(b ^ key[(offset + i) % len(key)] for i, b in enumerate(data))


async def xor_copy_decrypt(enc_key: bytes, source: AsyncIterable[bytes], dest) -> int:
    """Stand-in for the real decrypt-and-copy primitive."""
    written = 0
    async for chunk in source:
        plain = xor_bytes(chunk, enc_key, written)
        await dest.write(plain)
        written += len(plain)
    return written


@pytest.fixture
def store_root(tmp_path: pathlib.Path) -> pathlib.Path:
    """Storage root inside the test's temp dir (not created yet)."""
    return tmp_path / "store"


@pytest.fixture
def identity_store(store_root: pathlib.Path) -> LocalStore:
    """Store using the default identity transform."""
    return LocalStore(StoreOpts(root=store_root))


@pytest.fixture
def cas_store(store_root: pathlib.Path) -> LocalStore:
    """Store using the CAS transform and the XOR decrypt stub."""
    return LocalStore(StoreOpts(root=store_root, path_transform=cas_path_transform, copy_decrypt=xor_copy_decrypt))


@pytest.fixture
def xor():
    """The XOR helper, for producing ciphertext the decrypt stub accepts."""
    return xor_bytes
