# SPDX-License-Identifier: MIT
"""Unit tests for the store factory."""

import os

import pytest

from shardstore.config import get_root
from shardstore.pathkey import cas_path_transform, default_path_transform
from shardstore.storage import LocalStore, create_store, get_store


@pytest.fixture(autouse=True)
def clear_caches():
    get_root.cache_clear()
    get_store.cache_clear()
    yield
    get_root.cache_clear()
    get_store.cache_clear()


@pytest.mark.unit
def test_create_store_explicit(tmp_path):
    store = create_store(root=str(tmp_path), transform="cas")

    assert isinstance(store, LocalStore)
    assert store.root == tmp_path.resolve()
    assert store.opts.path_transform is cas_path_transform
    assert store.opts.copy_decrypt is None


@pytest.mark.unit
def test_create_store_unknown_transform(tmp_path):
    with pytest.raises(RuntimeError, match="Unknown path transform"):
        create_store(root=str(tmp_path), transform="sha256")


@pytest.mark.unit
def test_create_store_passes_copy_decrypt(tmp_path):
    async def copy_decrypt(enc_key, source, dest):
        return 0

    store = create_store(root=str(tmp_path), copy_decrypt=copy_decrypt)
    assert store.opts.copy_decrypt is copy_decrypt


@pytest.mark.unit
def test_get_store_from_environment(mocker, tmp_path):
    mocker.patch.dict(os.environ, {"SHARDSTORE_ROOT": str(tmp_path), "SHARDSTORE_PATH_TRANSFORM": "identity"})

    store = get_store()

    assert store.root == tmp_path.resolve()
    assert store.opts.path_transform is default_path_transform


@pytest.mark.unit
def test_get_store_is_singleton(mocker, tmp_path):
    mocker.patch.dict(os.environ, {"SHARDSTORE_ROOT": str(tmp_path)})
    assert get_store() is get_store()


@pytest.mark.unit
async def test_get_store_round_trip(mocker, tmp_path):
    mocker.patch.dict(os.environ, {"SHARDSTORE_ROOT": str(tmp_path), "SHARDSTORE_PATH_TRANSFORM": "cas"})
    store = get_store()

    await store.write("tenant", "hello", b"world")
    assert await store.read_bytes("tenant", "hello") == b"world"
