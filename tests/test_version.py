from __future__ import annotations

from importlib import metadata

from infra import version as version_mod


def test_get_app_version_prefers_env_override(monkeypatch):
    monkeypatch.setenv("ALLOCATION_VALIDATOR_VERSION", "9.9.9")

    assert version_mod.get_app_version() == "9.9.9"


def test_get_app_version_falls_back_when_not_installed(monkeypatch):
    def _missing(_name):
        raise metadata.PackageNotFoundError(_name)

    monkeypatch.delenv("ALLOCATION_VALIDATOR_VERSION", raising=False)
    monkeypatch.setattr(version_mod.metadata, "version", _missing)

    assert version_mod.get_app_version() == version_mod._DEFAULT_APP_VERSION
