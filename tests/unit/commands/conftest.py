"""Shared test fixtures for CLI command testing."""

import pytest
from click.testing import CliRunner

from fpcli.cli import cli


@pytest.fixture
def cli_runner():
    """Provide Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def run_cli(cli_runner):
    """Invoke the fpcli group with a list of arguments."""

    def _run(*args: str):
        return cli_runner.invoke(cli, [str(arg) for arg in args])

    return _run


@pytest.fixture
def app_manifest(tmp_path, write_json):
    """An application manifest importing one module by path, plus that module."""
    write_json(
        tmp_path / "shared" / "libfoo.json",
        {
            "name": "libfoo",
            "sources": [{"type": "archive", "url": "https://example.org/libfoo-1.0.tar.gz"}],
        },
    )
    return write_json(
        tmp_path / "org.example.App.json",
        {
            "id": "org.example.App",
            "runtime": "org.gnome.Platform",
            "modules": [
                "shared/libfoo.json",
                {
                    "name": "app",
                    "sources": [{"type": "git", "url": "https://example.org/app.git"}],
                },
            ],
        },
    )
