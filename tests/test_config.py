"""Unit tests for the config module."""

# pylint: disable=missing-class-docstring,missing-function-docstring

import pytest
from pydantic import ValidationError

from doc_recovery.config import (
    ENV_INCLUDE_HIDDEN_LAYERS,
    ENV_SYNTHETIC_PAGE_CHUNK_SIZE,
    ROOT,
    RecoveryConfig,
)


def clear_env(monkeypatch):
    """Remove both config variables for the duration of a test (restored afterwards)."""
    for name in (ENV_INCLUDE_HIDDEN_LAYERS, ENV_SYNTHETIC_PAGE_CHUNK_SIZE):
        monkeypatch.setenv(name, "placeholder")
        monkeypatch.delenv(name)


class TestDefaults:

    def test_hidden_layers_excluded(self):
        assert RecoveryConfig().include_hidden_layers is False

    def test_chunk_size_fifty(self):
        assert RecoveryConfig().synthetic_page_chunk_size == 50

    def test_chunk_size_must_be_positive(self):
        with pytest.raises(ValidationError):
            RecoveryConfig(synthetic_page_chunk_size=0)

    def test_frozen(self):
        cfg = RecoveryConfig()
        with pytest.raises(ValidationError):
            cfg.include_hidden_layers = True

    def test_root_is_project_root(self):
        """ROOT should point to the project root (contains pyproject.toml)."""
        assert (ROOT / "pyproject.toml").exists()


class TestFromEnv:

    def test_reads_environment(self, monkeypatch, tmp_path):
        clear_env(monkeypatch)
        monkeypatch.setenv(ENV_INCLUDE_HIDDEN_LAYERS, "true")
        monkeypatch.setenv(ENV_SYNTHETIC_PAGE_CHUNK_SIZE, "12")
        cfg = RecoveryConfig.from_env(tmp_path / "missing.env")
        assert cfg.include_hidden_layers is True
        assert cfg.synthetic_page_chunk_size == 12

    def test_falsy_flag(self, monkeypatch, tmp_path):
        clear_env(monkeypatch)
        monkeypatch.setenv(ENV_INCLUDE_HIDDEN_LAYERS, "no")
        assert RecoveryConfig.from_env(tmp_path / "missing.env").include_hidden_layers is False

    def test_reads_dotenv_file(self, monkeypatch, tmp_path):
        clear_env(monkeypatch)
        env_file = tmp_path / ".env"
        env_file.write_text(f"{ENV_SYNTHETIC_PAGE_CHUNK_SIZE}=7\n")
        assert RecoveryConfig.from_env(env_file).synthetic_page_chunk_size == 7

    def test_unset_uses_defaults(self, monkeypatch, tmp_path):
        clear_env(monkeypatch)
        assert RecoveryConfig.from_env(tmp_path / "missing.env") == RecoveryConfig()
