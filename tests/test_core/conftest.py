"""Core test fixtures."""

from __future__ import annotations

import pytest

from memio.core.registry import registry


@pytest.fixture(autouse=True)
def restore_registry_state(monkeypatch):
    """Undo ``registry.freeze()`` calls made by the CLI under test."""
    monkeypatch.setattr(registry, "_frozen", registry.frozen)


@pytest.fixture()
def memio_toml(tmp_path, fake_proc):
    """A memio.toml pointing the process layer at the fake procfs."""
    path = tmp_path / "memio.toml"
    path.write_text(f'[process]\nproc_root = "{fake_proc}"\n')
    return path
