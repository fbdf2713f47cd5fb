"""Tests for the lint command."""

import json


class TestLintCommand:
    def test_check_formatted_file(self, run_cli, app_manifest):
        result = run_cli("lint", "--check", app_manifest)

        assert result.exit_code == 0, result.output
        assert result.stdout == "The file is formatted correctly.\n"

    def test_check_unformatted_file(self, run_cli, tmp_path):
        manifest = tmp_path / "org.example.App.json"
        manifest.write_text('{"modules": [], "id": "org.example.App"}')

        result = run_cli("lint", "--check", manifest)

        assert result.exit_code == 1
        assert "There are formatting issues" in result.stderr
        assert manifest.read_text() == '{"modules": [], "id": "org.example.App"}'

    def test_lint_rewrites_file(self, run_cli, tmp_path):
        manifest = tmp_path / "org.example.App.json"
        manifest.write_text('{"modules": [], "id": "org.example.App", "x-extra": 1}')

        result = run_cli("lint", manifest)

        assert result.exit_code == 0, result.output
        assert result.stdout == f"Formatted {manifest}.\n"
        assert manifest.read_text() == '{\n    "id": "org.example.App",\n    "x-extra": 1\n}\n'

        # A second run finds nothing to change
        assert run_cli("lint", "--check", manifest).exit_code == 0

    def test_lint_formatted_file_unchanged(self, run_cli, app_manifest):
        before = app_manifest.read_text()

        result = run_cli("lint", app_manifest)

        assert result.exit_code == 0
        assert result.stdout == ""
        assert app_manifest.read_text() == before

    def test_lint_yaml_module(self, run_cli, tmp_path):
        manifest = tmp_path / "foo.yml"
        manifest.write_text("name: foo\nsources:\n- type: dir\n  path: .\n")

        result = run_cli("lint", manifest)

        assert result.exit_code == 0, result.output
        assert manifest.read_text() == "name: foo\nsources:\n  - type: dir\n    path: .\n"

    def test_lint_sources(self, run_cli, tmp_path):
        manifest = tmp_path / "sources.json"
        manifest.write_text('[{"url": "https://example.org/a.tar.gz", "type": "archive"}]')

        result = run_cli("lint", manifest)

        assert result.exit_code == 0, result.output
        assert json.loads(manifest.read_text()) == [
            {"type": "archive", "url": "https://example.org/a.tar.gz"}
        ]

    def test_check_single_source_file(self, run_cli, tmp_path):
        manifest = tmp_path / "src.json"
        manifest.write_text('{\n    "type": "dir",\n    "path": "."\n}\n')

        result = run_cli("lint", "--check", manifest)

        assert result.exit_code == 0, result.output
        assert result.stdout == "The file is formatted correctly.\n"

    def test_lint_single_source_file_stays_a_mapping(self, run_cli, tmp_path):
        manifest = tmp_path / "src.json"
        manifest.write_text('{"path": ".", "type": "dir"}')

        result = run_cli("lint", manifest)

        assert result.exit_code == 0, result.output
        assert json.loads(manifest.read_text()) == {"type": "dir", "path": "."}

    def test_lint_invalid_file(self, run_cli, tmp_path):
        manifest = tmp_path / "broken.json"
        manifest.write_text("{")

        result = run_cli("lint", manifest)

        assert result.exit_code == 1
        assert "Could not parse JSON manifest" in result.stderr
        assert manifest.read_text() == "{"
