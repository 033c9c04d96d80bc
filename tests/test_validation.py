"""
Tests for input validation — names, hosts, paths and files.
"""

from pathlib import Path

import pytest

from epos_opensource.core.errors import (
    InvalidHostError,
    InvalidInputError,
    InvalidNameError,
    NotADirectoryPathError,
    NotAFilePathError,
    PathNotFoundError,
)
from epos_opensource.core.validation import (
    validate_file,
    validate_host,
    validate_name,
    validate_path,
)


class TestValidateName:
    """Environment names: letters, digits, '.', '_' and '-'."""

    @pytest.mark.parametrize("name", ["dev", "my-env", "v1.2_beta", "A", "0", "...", "a-b.c_d"])
    def test_accepts(self, name: str):
        validate_name(name)

    def test_rejects_empty(self):
        with pytest.raises(InvalidNameError, match="must not be empty"):
            validate_name("")

    @pytest.mark.parametrize("name", ["my env", "a/b", "ü", "dev!", "tab\there", "x:y"])
    def test_rejects_other_characters(self, name: str):
        with pytest.raises(InvalidNameError):
            validate_name(name)

    def test_rejects_trailing_newline(self):
        with pytest.raises(InvalidNameError):
            validate_name("dev\n")

    def test_is_input_error(self):
        with pytest.raises(InvalidInputError):
            validate_name("bad name")


class TestValidateHost:
    """Custom hosts: empty, an IP literal or a hostname."""

    @pytest.mark.parametrize(
        "host",
        ["", "localhost", "example.com", "a-b.example.org", "10.0.0.1", "::1", "2001:db8::1", "x"],
    )
    def test_accepts(self, host: str):
        validate_host(host)

    @pytest.mark.parametrize(
        "host",
        ["-bad.example.com", "bad-.example.com", "under_score.com", "a..b", "host name", "example.com."],
    )
    def test_rejects(self, host: str):
        with pytest.raises(InvalidHostError, match="not a valid ip or hostname"):
            validate_host(host)


class TestValidatePath:
    """Directories must exist and be directories."""

    def test_empty_is_ok(self):
        validate_path("")

    def test_existing_directory(self, tmp_path: Path):
        validate_path(tmp_path)
        validate_path(str(tmp_path))

    def test_missing(self, tmp_path: Path):
        missing = tmp_path / "nope"
        with pytest.raises(PathNotFoundError) as exc:
            validate_path(missing)
        assert exc.value.path == str(missing)

    def test_file_is_not_a_directory(self, tmp_path: Path):
        f = tmp_path / "file.txt"
        f.write_text("x")
        with pytest.raises(NotADirectoryPathError):
            validate_path(f)


class TestValidateFile:
    """Files must exist and not be directories."""

    def test_empty_is_ok(self):
        validate_file("")

    def test_existing_file(self, tmp_path: Path):
        f = tmp_path / "compose.yaml"
        f.write_text("services: {}\n")
        validate_file(f)

    def test_missing(self, tmp_path: Path):
        with pytest.raises(PathNotFoundError):
            validate_file(tmp_path / "missing.yaml")

    def test_directory_is_not_a_file(self, tmp_path: Path):
        with pytest.raises(NotAFilePathError, match="is a directory"):
            validate_file(tmp_path)
