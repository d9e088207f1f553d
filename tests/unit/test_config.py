# SPDX-License-Identifier: MIT
"""Unit tests for configuration management."""

import os

import pytest

from shardstore.config import get_path_transform, get_root
from shardstore.pathkey import cas_path_transform, default_path_transform


@pytest.fixture(autouse=True)
def clear_root_cache():
    """Clear get_root() cache before each test to ensure isolation."""
    get_root.cache_clear()
    yield
    get_root.cache_clear()


@pytest.mark.unit
class TestGetRoot:
    def test_existing_directory(self, mocker, tmp_path):
        mocker.patch.dict(os.environ, {"SHARDSTORE_ROOT": str(tmp_path)})
        assert get_root() == tmp_path.resolve()

    def test_missing_directory_allowed(self, mocker, tmp_path):
        """Root is created on first write, so it need not exist yet."""
        target = tmp_path / "not-yet"
        mocker.patch.dict(os.environ, {"SHARDSTORE_ROOT": str(target)})
        assert get_root() == target.resolve()
        assert not target.exists()

    def test_whitespace_stripped(self, mocker, tmp_path):
        mocker.patch.dict(os.environ, {"SHARDSTORE_ROOT": f"  {tmp_path}  "})
        assert get_root() == tmp_path.resolve()

    def test_default_root_folder(self, mocker, monkeypatch, tmp_path):
        mocker.patch.dict(os.environ, {}, clear=True)
        monkeypatch.chdir(tmp_path)
        assert get_root() == (tmp_path / "ssnetwork").resolve()

    def test_blank_falls_back_to_default(self, mocker, monkeypatch, tmp_path):
        mocker.patch.dict(os.environ, {"SHARDSTORE_ROOT": "   "})
        monkeypatch.chdir(tmp_path)
        assert get_root().name == "ssnetwork"

    def test_file_rejected(self, mocker, tmp_path):
        not_dir = tmp_path / "file.txt"
        not_dir.write_text("x")
        mocker.patch.dict(os.environ, {"SHARDSTORE_ROOT": str(not_dir)})
        with pytest.raises(RuntimeError, match="not a directory"):
            get_root()

    def test_symlink_rejected(self, mocker, tmp_path):
        real = tmp_path / "real"
        real.mkdir()
        link = tmp_path / "link"
        link.symlink_to(real)
        mocker.patch.dict(os.environ, {"SHARDSTORE_ROOT": str(link)})
        with pytest.raises(RuntimeError, match="symbolic link"):
            get_root()

    def test_cached(self, mocker, tmp_path):
        mocker.patch.dict(os.environ, {"SHARDSTORE_ROOT": str(tmp_path / "a")})
        first = get_root()
        mocker.patch.dict(os.environ, {"SHARDSTORE_ROOT": str(tmp_path / "b")})
        assert get_root() == first


@pytest.mark.unit
class TestGetPathTransform:
    def test_default_is_identity(self, mocker):
        mocker.patch.dict(os.environ, {}, clear=True)
        assert get_path_transform() is default_path_transform

    def test_cas(self, mocker):
        mocker.patch.dict(os.environ, {"SHARDSTORE_PATH_TRANSFORM": "CAS"})
        assert get_path_transform() is cas_path_transform

    def test_unknown(self, mocker):
        mocker.patch.dict(os.environ, {"SHARDSTORE_PATH_TRANSFORM": "md5"})
        with pytest.raises(RuntimeError, match="Unknown SHARDSTORE_PATH_TRANSFORM"):
            get_path_transform()
