"""Tests for ls, reverse DNS and config commands and the global options."""

import yaml

from fpcli import __version__


class TestLsCommand:
    def test_lists_applications(self, run_cli, tmp_path, write_json, app_manifest):
        write_json(tmp_path / ".git" / "org.example.Hidden.json", {"id": "org.example.Hidden"})

        result = run_cli("ls", tmp_path)

        assert result.exit_code == 0, result.output
        assert result.stdout == f"Flatpak application at {app_manifest}.\n"

    def test_defaults_to_current_directory(self, run_cli, tmp_path, monkeypatch, write_json):
        write_json(tmp_path / "org.example.App.yaml", {"id": "org.example.App"})
        monkeypatch.chdir(tmp_path)

        result = run_cli("ls")

        assert "org.example.App.yaml" in result.stdout

    def test_missing_directory(self, run_cli, tmp_path):
        assert run_cli("ls", tmp_path / "nope").exit_code == 2


class TestReverseDnsCommands:
    def test_to_reverse_dns(self, run_cli):
        result = run_cli("to-reverse-dns", "https://github.com/louib/fpcli.git")

        assert result.stdout == "com.github.louib.fpcli\n"

    def test_is_reverse_dns(self, run_cli):
        assert run_cli("is-reverse-dns", "org.gnome.Maps.json").stdout == "true\n"
        assert run_cli("is-reverse-dns", "manifest.json").stdout == "false\n"


class TestConfigCommands:
    def test_show_defaults(self, run_cli, isolated_config):
        result = run_cli("config", "show")

        assert result.exit_code == 0, result.output
        assert result.stdout.startswith(f"# Configuration file: {isolated_config}\n")
        data = yaml.safe_load(result.stdout)
        assert data["bootstrap"]["default_branch"] == "master"
        assert data["tree"]["max_depth"] == 1000

    def test_show_with_explicit_file(self, run_cli, tmp_path, monkeypatch):
        config_file = tmp_path / "custom.yaml"
        config_file.write_text("codec:\n  json_indent: 2\n")
        monkeypatch.setenv("FPCLI_RESOLVER__MAX_DEPTH", "10")

        result = run_cli("--config", config_file, "config", "show")

        data = yaml.safe_load(result.stdout)
        assert data["codec"]["json_indent"] == 2
        assert data["resolver"]["max_depth"] == 10

    def test_init(self, run_cli, isolated_config):
        result = run_cli("config", "init")

        assert result.exit_code == 0, result.output
        assert isolated_config.exists()
        assert "Wrote default configuration" in result.stdout

    def test_init_refuses_overwrite(self, run_cli, isolated_config):
        isolated_config.write_text("tree:\n  max_depth: 1\n")

        result = run_cli("config", "init")

        assert result.exit_code == 1
        assert "already exists" in result.stderr
        assert isolated_config.read_text() == "tree:\n  max_depth: 1\n"

        assert run_cli("config", "init", "--force").exit_code == 0


class TestGlobalOptions:
    def test_version(self, run_cli):
        result = run_cli("--version")

        assert __version__ in result.stdout

    def test_debug_logs_to_stderr_only(self, run_cli, app_manifest):
        result = run_cli("--debug", "tree", "--resolve", app_manifest)

        assert result.exit_code == 0, result.output
        assert "Resolving module reference" in result.stderr
        assert "Resolving module reference" not in result.stdout

    def test_invalid_log_level(self, run_cli):
        assert run_cli("--log-level", "LOUD", "ls").exit_code == 2

    def test_help_lists_commands(self, run_cli):
        result = run_cli("--help")

        for name in ("resolve", "tree", "bootstrap", "lint", "get-urls", "add-module"):
            assert name in result.stdout
