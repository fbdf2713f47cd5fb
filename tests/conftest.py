import json
import os
from pathlib import Path
from typing import Any, Callable

import pytest
import yaml


@pytest.fixture(autouse=True)
def isolated_config(
    tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
) -> Path:
    """Keep the user's fpcli configuration and FPCLI_* variables out of tests."""
    for key in list(os.environ):
        if key.startswith("FPCLI_"):
            monkeypatch.delenv(key)

    config_path = tmp_path_factory.mktemp("fpcli-config") / "config.yaml"
    monkeypatch.setenv("FPCLI_CONFIG_PATH", str(config_path))
    return config_path


@pytest.fixture
def write_json() -> Callable[[Path, Any], Path]:
    """Write data as a canonical JSON manifest (4-space indent, trailing newline)."""

    def _write(path: Path, data: Any) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        text = json.dumps(data, indent=4, ensure_ascii=False) + "\n"
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def write_yaml() -> Callable[[Path, Any], Path]:
    """Write data as a YAML manifest."""

    def _write(path: Path, data: Any) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sample_application() -> dict:
    """A small application manifest with one inline module."""
    return {
        "id": "org.example.Sample",
        "runtime": "org.gnome.Platform",
        "runtime-version": "41",
        "sdk": "org.gnome.Sdk",
        "command": "sample",
        "finish-args": ["--socket=wayland"],
        "modules": [
            {
                "name": "sample",
                "buildsystem": "meson",
                "sources": [
                    {
                        "type": "git",
                        "url": "https://gitlab.gnome.org/GNOME/sample.git",
                        "branch": "main",
                    }
                ],
            }
        ],
    }
