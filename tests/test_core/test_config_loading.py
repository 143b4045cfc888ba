"""Tests for TOML config file loading and MemioConfig construction."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from memio.bridge import DEFAULT_PROC_ROOT
from memio.core.config import DisplayConfig, MemioConfig, ProcessConfig, load_config


class TestLoadConfig:
    def test_nonexistent_file_returns_defaults(self):
        config = load_config("/nonexistent/path/memio.toml")
        assert config.process.proc_root == DEFAULT_PROC_ROOT
        assert config.display.address_width == 16

    def test_none_path_returns_defaults(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        config = load_config(None)
        assert isinstance(config, MemioConfig)
        assert config.verbose is False

    def test_none_path_reads_working_directory(self, tmp_path, monkeypatch):
        (tmp_path / "memio.toml").write_text("verbose = true\n")
        monkeypatch.chdir(tmp_path)
        assert load_config(None).verbose is True

    def test_load_full_toml(self, tmp_path):
        toml_file = tmp_path / "memio.toml"
        # verbose is a top-level key, so it must precede the first table.
        toml_file.write_text(
            'verbose = true\n'
            '\n'
            '[process]\n'
            'proc_root = "/tmp/fakeproc"\n'
            '\n'
            '[display]\n'
            'address_width = 12\n'
            'bytes_per_row = 8\n'
        )
        config = load_config(str(toml_file))
        assert config.verbose is True
        assert config.process.proc_root == "/tmp/fakeproc"
        assert config.display.address_width == 12
        assert config.display.bytes_per_row == 8

    def test_load_partial_toml(self, tmp_path):
        """Only [display] section: other sections keep their defaults."""
        toml_file = tmp_path / "memio.toml"
        toml_file.write_text("[display]\nbytes_per_row = 32\n")
        config = load_config(str(toml_file))
        assert config.display.bytes_per_row == 32
        # defaults preserved
        assert config.display.address_width == 16
        assert config.process.proc_root == DEFAULT_PROC_ROOT

    def test_invalid_value_rejected(self, tmp_path):
        toml_file = tmp_path / "memio.toml"
        toml_file.write_text("[display]\naddress_width = 0\n")
        with pytest.raises(ValidationError):
            load_config(str(toml_file))


class TestModels:
    def test_defaults(self):
        config = MemioConfig()
        assert config.process == ProcessConfig()
        assert config.display == DisplayConfig()

    def test_override(self):
        config = MemioConfig(process=ProcessConfig(proc_root="/x"), verbose=True)
        assert config.process.proc_root == "/x"
        assert config.verbose is True
