"""
Unit tests for FileHasher in explorer_core.scanning.file_hasher.

Tests cover:
- Basic SHA256 hashing functionality
- Cache behavior and statistics
- Error handling (file not found, permission denied, directories, links)
- Directory tree descriptions used for copy verification
"""

import hashlib
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from explorer_core.scanning import FileHasher
from explorer_core.scanning.file_hasher import CHUNK_SIZE, DIRECTORY_MARKER, LINK_PREFIX


@pytest.mark.unit
class TestFileHasherBasic:
    """Basic FileHasher functionality tests."""

    def test_hash_file_basic(self, temp_dir: Path):
        """Hash small text file, verify SHA256 output format."""
        hasher = FileHasher()
        content = "Hello, World! This is test content."
        test_file = temp_dir / "test.txt"
        test_file.write_text(content)

        result = hasher.hash_file(test_file)

        assert result == hashlib.sha256(content.encode()).hexdigest()
        assert len(result) == 64

    def test_hash_file_empty(self, temp_dir: Path):
        hasher = FileHasher()
        test_file = temp_dir / "empty.txt"
        test_file.write_text("")

        assert hasher.hash_file(test_file) == hashlib.sha256(b"").hexdigest()

    def test_multiple_chunks(self, temp_dir: Path):
        """Test file spanning multiple chunks."""
        hasher = FileHasher()
        test_file = temp_dir / "multi_chunk.bin"
        content = b"Y" * int(CHUNK_SIZE * 3.5)
        test_file.write_bytes(content)

        assert hasher.hash_file(test_file) == hashlib.sha256(content).hexdigest()


@pytest.mark.unit
class TestFileHasherCaching:
    """Tests for FileHasher caching behavior."""

    def test_hash_caching(self, temp_dir: Path):
        """Hash same file twice, verify cache hit (no re-read)."""
        hasher = FileHasher()
        test_file = temp_dir / "cached.txt"
        test_file.write_text("content to cache")

        hash1 = hasher.hash_file(test_file)
        with patch('builtins.open', wraps=open) as mock_open:
            hash2 = hasher.hash_file(test_file)
            mock_open.assert_not_called()

        assert hash1 == hash2
        assert hasher.get_cache_stats() == {"size": 1, "hits": 1, "misses": 1}

    def test_modified_file_hashed_again(self, temp_dir: Path):
        hasher = FileHasher()
        test_file = temp_dir / "changing.txt"
        test_file.write_text("before")
        before = hasher.hash_file(test_file)

        test_file.write_text("after!")
        stat = test_file.stat()
        os.utime(test_file, (stat.st_atime, stat.st_mtime + 10))

        assert hasher.hash_file(test_file) != before

    def test_clear_cache(self, temp_dir: Path):
        """Verify cache clearing functionality."""
        hasher = FileHasher()
        test_file = temp_dir / "to_clear.txt"
        test_file.write_text("some content")
        hash_before = hasher.hash_file(test_file)

        hasher.clear_cache()

        assert hasher.get_cache_stats() == {"size": 0, "hits": 0, "misses": 0}
        assert hasher.hash_file(test_file) == hash_before


@pytest.mark.unit
class TestFileHasherErrors:
    """Tests for FileHasher error handling."""

    def test_hash_file_not_found(self, temp_dir: Path):
        hasher = FileHasher()

        assert hasher.hash_file(temp_dir / "non_existent_file.txt") is None
        assert len(hasher.get_errors()) == 1

    def test_hash_file_permission_denied(self, temp_dir: Path):
        """A PermissionError while reading yields None and an error entry."""
        hasher = FileHasher()
        test_file = temp_dir / "no_permission.txt"
        test_file.write_text("secret content")

        with patch('builtins.open', side_effect=PermissionError("Access denied")):
            result = hasher.hash_file(test_file)

        assert result is None
        assert any("Permission denied" in error for error in hasher.get_errors())

    def test_hash_directory_returns_none(self, temp_dir: Path):
        hasher = FileHasher()
        test_dir = temp_dir / "subdirectory"
        test_dir.mkdir()

        assert hasher.hash_file(test_dir) is None

    def test_symlink_not_followed(self, temp_dir: Path):
        hasher = FileHasher()
        original = temp_dir / "original.txt"
        original.write_text("original content")
        symlink = temp_dir / "link.txt"
        try:
            symlink.symlink_to(original)
        except OSError:
            pytest.skip("Symlinks not supported on this platform")

        assert hasher.hash_file(symlink) is None

    def test_clear_errors(self, temp_dir: Path):
        hasher = FileHasher()
        hasher.hash_file(temp_dir / "missing.txt")

        hasher.clear_errors()

        assert hasher.get_errors() == []


@pytest.mark.unit
class TestHashTree:
    """Tests for hash_tree()."""

    def test_tree_entries(self, paste_scenario):
        hasher = FileHasher()

        tree = hasher.hash_tree(paste_scenario["dir"])

        assert tree == {
            "top.txt": hashlib.sha256(b"top").hexdigest(),
            "sub": DIRECTORY_MARKER,
            "sub/deep.txt": hashlib.sha256(b"deep").hexdigest(),
        }

    def test_identical_trees_compare_equal(self, paste_scenario, temp_dir: Path):
        hasher = FileHasher()
        copy = temp_dir / "copy"
        (copy / "sub").mkdir(parents=True)
        (copy / "top.txt").write_text("top")
        (copy / "sub" / "deep.txt").write_text("deep")

        assert hasher.hash_tree(copy) == hasher.hash_tree(paste_scenario["dir"])

        (copy / "sub" / "deep.txt").write_text("changed")
        assert hasher.hash_tree(copy) != hasher.hash_tree(paste_scenario["dir"])

    def test_links_recorded_not_followed(self, temp_dir: Path):
        hasher = FileHasher()
        root = temp_dir / "root"
        root.mkdir()
        (temp_dir / "outside").mkdir()
        try:
            (root / "link").symlink_to(temp_dir / "outside", target_is_directory=True)
        except OSError:
            pytest.skip("Symlinks not supported on this platform")

        tree = hasher.hash_tree(root)

        assert tree == {"link": LINK_PREFIX + str(temp_dir / "outside")}

    def test_unreadable_file_fails_tree(self, paste_scenario):
        hasher = FileHasher()

        with patch('builtins.open', side_effect=OSError("Disk error")):
            assert hasher.hash_tree(paste_scenario["dir"]) is None
