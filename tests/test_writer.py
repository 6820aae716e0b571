"""Tests for hash-gated file writes."""

import zlib

import pytest

from gql_freeze.core.errors import OutputWriteError
from gql_freeze.core.writer import (
    FileWriteResult,
    content_hash,
    ensure_directory,
    overwrite_on_diff,
    read_embedded_hash,
    write_once,
)


class TestContentHash:
    """Tests for content_hash."""

    def test_is_crc32_of_utf8(self):
        assert content_hash("héllo") == zlib.crc32("héllo".encode("utf-8"))

    def test_known_value(self):
        # CRC-32 check value
        assert content_hash("123456789") == 0xCBF43926


class TestReadEmbeddedHash:
    """Tests for read_embedded_hash."""

    def test_reads_header(self, tmp_path):
        path = tmp_path / "a.ts"
        path.write_bytes(b"// hash:42\r\nrest")
        assert read_embedded_hash(path) == 42

    def test_missing_header(self, tmp_path):
        path = tmp_path / "a.ts"
        path.write_text("export {}\n")
        assert read_embedded_hash(path) is None

    def test_non_numeric_header(self, tmp_path):
        path = tmp_path / "a.ts"
        path.write_text("// hash:abc\n")
        assert read_embedded_hash(path) is None

    def test_non_ascii_digit_header(self, tmp_path):
        path = tmp_path / "a.ts"
        path.write_text("// hash:²\nbody", encoding="utf-8")
        assert read_embedded_hash(path) is None

    def test_non_ascii_digit_header_is_rewritten(self, tmp_path):
        path = tmp_path / "schema.ts"
        path.write_text("// hash:²\nbody", encoding="utf-8")
        assert overwrite_on_diff(path, "new\n") == FileWriteResult.OVERWRITTEN
        checksum = content_hash("new\n")
        assert path.read_text(encoding="utf-8") == f"// hash:{checksum}\nnew\n"

    def test_empty_file(self, tmp_path):
        path = tmp_path / "a.ts"
        path.write_text("")
        assert read_embedded_hash(path) is None


class TestOverwriteOnDiff:
    """Tests for overwrite_on_diff."""

    def test_creates_with_header(self, tmp_path):
        path = tmp_path / "schema.ts"
        result = overwrite_on_diff(path, "content\n", "\n")
        assert result == FileWriteResult.CREATED
        checksum = content_hash("content\n")
        assert path.read_bytes() == f"// hash:{checksum}\ncontent\n".encode()

    def test_header_uses_line_break(self, tmp_path):
        path = tmp_path / "schema.ts"
        overwrite_on_diff(path, "a\r\n", "\r\n")
        assert path.read_bytes().startswith(b"// hash:")
        assert path.read_bytes().endswith(b"\r\na\r\n")

    def test_identical_content_skipped(self, tmp_path):
        path = tmp_path / "schema.ts"
        overwrite_on_diff(path, "content\n")
        first = path.read_bytes()
        assert overwrite_on_diff(path, "content\n") == FileWriteResult.NO_CHANGE
        assert path.read_bytes() == first

    def test_only_header_is_compared(self, tmp_path):
        path = tmp_path / "schema.ts"
        overwrite_on_diff(path, "content\n")
        # Hand edits below a matching header go unnoticed
        path.write_text(path.read_text() + "// edited\n")
        assert overwrite_on_diff(path, "content\n") == FileWriteResult.NO_CHANGE

    def test_changed_content_overwritten(self, tmp_path):
        path = tmp_path / "schema.ts"
        overwrite_on_diff(path, "old\n")
        assert overwrite_on_diff(path, "new\n") == FileWriteResult.OVERWRITTEN
        checksum = content_hash("new\n")
        assert path.read_text() == f"// hash:{checksum}\nnew\n"

    def test_file_without_header_overwritten(self, tmp_path):
        path = tmp_path / "schema.ts"
        path.write_text("handwritten\n")
        assert overwrite_on_diff(path, "new\n") == FileWriteResult.OVERWRITTEN

    def test_byte_identical_reruns(self, tmp_path):
        a = tmp_path / "a.ts"
        b = tmp_path / "b.ts"
        overwrite_on_diff(a, "same\n")
        overwrite_on_diff(b, "same\n")
        assert a.read_bytes() == b.read_bytes()

    def test_missing_directory_raises(self, tmp_path):
        with pytest.raises(OutputWriteError) as exc_info:
            overwrite_on_diff(tmp_path / "missing" / "schema.ts", "x")
        assert exc_info.value.path == tmp_path / "missing" / "schema.ts"
        assert isinstance(exc_info.value.cause, OSError)


class TestWriteOnce:
    """Tests for write_once."""

    def test_creates_without_header(self, tmp_path):
        path = tmp_path / "index.ts"
        assert write_once(path, "export {}\n") == FileWriteResult.CREATED
        assert path.read_text() == "export {}\n"

    def test_existing_file_untouched(self, tmp_path):
        path = tmp_path / "index.ts"
        path.write_text("mine\n")
        assert write_once(path, "theirs\n") == FileWriteResult.EXISTS
        assert path.read_text() == "mine\n"


class TestEnsureDirectory:
    """Tests for ensure_directory."""

    def test_creates_parents(self, tmp_path):
        target = tmp_path / "a" / "b"
        ensure_directory(target)
        assert target.is_dir()

    def test_file_in_the_way_raises(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        with pytest.raises(OutputWriteError):
            ensure_directory(blocker / "out")
