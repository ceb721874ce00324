"""Unit tests for size-based exclusion rules."""

import pytest

from repotree.exclusion_rules.size_rules import SizeExclusionRules, parse_file_size
from repotree.path_record import normalize_record


class TestParseFileSize:
    """Test the parse_file_size utility function."""

    def test_parse_bytes_only(self):
        """Test parsing raw byte values."""
        assert parse_file_size("1024") == 1024
        assert parse_file_size("0") == 0

    def test_parse_human_readable_decimal(self):
        """Test parsing decimal units (KB, MB, GB)."""
        assert parse_file_size("1KB") == 1000
        assert parse_file_size("1MB") == 1000000
        assert parse_file_size("2.5MB") == 2500000

    def test_parse_human_readable_binary(self):
        """Test parsing binary units (KiB, MiB, GiB)."""
        assert parse_file_size("1KiB") == 1024
        assert parse_file_size("1MiB") == 1048576

    def test_parse_with_spaces(self):
        """Test parsing with spaces in format."""
        assert parse_file_size("1 GB") == 1000000000

    def test_parse_invalid_format(self):
        """Test that invalid formats raise ValueError."""
        with pytest.raises(ValueError, match="Invalid size format"):
            parse_file_size("invalid")

        with pytest.raises(ValueError, match="Invalid size format"):
            parse_file_size("1XB")


class TestSizeExclusionRules:
    """Test the SizeExclusionRules class."""

    def test_init_with_string(self):
        rules = SizeExclusionRules("1MB")
        assert rules.max_size_bytes == 1000000

    def test_init_with_int(self):
        rules = SizeExclusionRules(1048576)
        assert rules.max_size_bytes == 1048576

    def test_init_with_negative_int(self):
        with pytest.raises(ValueError, match="Size cannot be negative"):
            SizeExclusionRules(-1)

    @pytest.mark.parametrize("value", [1.5, None, True, [100]])
    def test_init_with_invalid_type(self, value):
        with pytest.raises(ValueError, match="max_size must be string or int"):
            SizeExclusionRules(value)

    def test_exclude_record_by_reported_size(self):
        """Test that only files over the limit are excluded."""
        rules = SizeExclusionRules(1000)
        assert rules.exclude_record(normalize_record("big.bin", "file", 1001))
        assert not rules.exclude_record(normalize_record("edge.bin", "file", 1000))
        assert not rules.exclude_record(normalize_record("small.bin", "file", 10))

    def test_sizeless_files_and_directories_are_kept(self):
        rules = SizeExclusionRules(0)
        assert not rules.exclude_record(normalize_record("unknown.bin", "file"))
        assert not rules.exclude_record(normalize_record("docs", "dir", 4096))
        assert rules.exclude_record(normalize_record("one.bin", "file", 1))

    def test_bare_path_is_never_excluded(self):
        assert not SizeExclusionRules(0).exclude("anything.bin")

    def test_has_rules(self):
        assert SizeExclusionRules("1KB").has_rules()
        assert not SizeExclusionRules(0).has_rules()

    def test_add_rule_not_supported(self):
        with pytest.raises(NotImplementedError, match="doesn't support adding individual rules"):
            SizeExclusionRules(10).add_rule("20")
