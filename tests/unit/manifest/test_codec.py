"""Tests for the manifest codec."""

import json
from pathlib import Path

import pytest

from fpcli.exceptions import (
    ManifestNotFoundError,
    ManifestParseError,
    ManifestSerializationError,
)
from fpcli.manifest import codec
from fpcli.manifest.models import Application, ManifestFormat, Module, ModulePath, Source

CANONICAL_YAML = """\
id: org.example.Sample
runtime: org.gnome.Platform
runtime-version: '41'
sdk: org.gnome.Sdk
command: sample
finish-args:
  - --share=network
  - --socket=wayland
modules:
  - shared-modules/libsecret.json
  - name: sample
    buildsystem: meson
    config-opts:
      - -Dtests=false
    sources:
      - type: git
        url: https://gitlab.gnome.org/GNOME/sample.git
        branch: main
    modules:
      - name: nested
        sources:
          - type: archive
            url: https://example.org/nested-1.0.tar.xz
            sha256: abc123
  - name: ünïcode
    buildsystem: simple
    build-commands:
      - install -Dm755 run.sh /app/bin/run
    x-custom-key: kept
"""


class TestFormatDetection:
    @pytest.mark.parametrize(
        "path, expected",
        [
            ("org.example.App.json", ManifestFormat.JSON),
            ("org.example.App.yaml", ManifestFormat.YAML),
            ("dir/org.example.App.YML", ManifestFormat.YAML),
        ],
    )
    def test_detect_format(self, path, expected):
        assert codec.detect_format(path) == expected

    def test_unknown_extension(self):
        with pytest.raises(ManifestParseError, match="Unsupported manifest extension"):
            codec.detect_format("manifest.toml")

    @pytest.mark.parametrize("name", ["json", "JSON", "yaml", "yml", ".yml"])
    def test_parse_format(self, name):
        assert codec.parse_format(name) in (ManifestFormat.JSON, ManifestFormat.YAML)

    def test_parse_invalid_format(self):
        with pytest.raises(ManifestParseError, match="Invalid manifest format"):
            codec.parse_format("xml")


class TestDocumentKinds:
    def test_sniffing(self):
        assert codec.is_application_data({"id": "org.example.App"})
        assert codec.is_application_data({"app-id": "org.example.App", "name": "x"})
        assert codec.is_module_data({"name": "foo"})
        assert not codec.is_module_data({"name": "foo", "id": "org.example.App"})
        assert codec.is_sources_data({"type": "git", "url": "https://example.org/a.git"})
        assert codec.is_sources_data([{"type": "dir", "path": "."}])
        assert not codec.is_sources_data([])
        assert not codec.is_sources_data("just a string")

    def test_load_manifest_dispatch(self, tmp_path: Path, write_json, write_yaml):
        app_path = write_json(tmp_path / "org.example.App.json", {"id": "org.example.App"})
        module_path = write_yaml(tmp_path / "foo.yaml", {"name": "foo"})
        source_path = write_json(tmp_path / "foo-source.json", {"type": "dir", "path": "."})

        assert isinstance(codec.load_manifest(app_path), Application)
        assert isinstance(codec.load_manifest(module_path), Module)
        sources = codec.load_manifest(source_path)
        assert isinstance(sources, list)
        assert isinstance(sources[0], Source)

    def test_load_sources_list(self, tmp_path: Path, write_yaml):
        path = write_yaml(
            tmp_path / "sources.yml",
            [
                {"type": "archive", "url": "https://example.org/a.tar.gz"},
                {"type": "patch", "path": "fix.patch"},
            ],
        )

        sources = codec.load_sources(path)

        assert [s.type.value for s in sources] == ["archive", "patch"]
        assert all(s.manifest_format == ManifestFormat.YAML for s in sources)

    def test_format_recorded(self, tmp_path: Path, write_json):
        path = write_json(tmp_path / "foo.json", {"name": "foo"})

        assert codec.load_module(path).manifest_format == ManifestFormat.JSON

    def test_wrong_kind(self, tmp_path: Path, write_json):
        path = write_json(tmp_path / "foo.json", {"name": "foo"})

        with pytest.raises(ManifestParseError, match="not a Flatpak application manifest"):
            codec.load_application(path)

    def test_not_a_manifest(self, tmp_path: Path, write_json):
        path = write_json(tmp_path / "package.json", {"version": "1.0.0"})

        with pytest.raises(ManifestParseError, match="is not a Flatpak manifest"):
            codec.load_manifest(path)


class TestLoadErrors:
    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ManifestNotFoundError) as exc_info:
            codec.load_module(tmp_path / "missing.json")

        assert exc_info.value.path == str(tmp_path / "missing.json")
        assert isinstance(exc_info.value.cause, FileNotFoundError)

    def test_missing_file_with_unknown_extension(self, tmp_path: Path):
        with pytest.raises(ManifestNotFoundError):
            codec.load_manifest(tmp_path / "missing.txt")

    def test_invalid_json(self, tmp_path: Path):
        path = tmp_path / "broken.json"
        path.write_text('{"name": "foo",')

        with pytest.raises(ManifestParseError, match="Could not parse JSON manifest"):
            codec.load_module(path)

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / "broken.yaml"
        path.write_text("name: [foo\n")

        with pytest.raises(ManifestParseError, match="Could not parse YAML manifest"):
            codec.load_module(path)

    def test_invalid_utf8(self, tmp_path: Path):
        path = tmp_path / "latin1.json"
        path.write_bytes(b'{"name": "caf\xe9"}')

        with pytest.raises(ManifestParseError, match="not valid UTF-8") as exc_info:
            codec.load_module(path)

        assert exc_info.value.error_code == "PARSE_ERROR"
        assert isinstance(exc_info.value.cause, UnicodeDecodeError)

    def test_validation_failure(self, tmp_path: Path, write_json):
        path = write_json(tmp_path / "foo.json", {"name": "foo", "buildsystem": "simple"})

        with pytest.raises(ManifestParseError, match="Invalid Flatpak module manifest"):
            codec.load_module(path)


class TestCanonicalOutput:
    def test_yaml_round_trip(self, tmp_path: Path):
        path = tmp_path / "org.example.Sample.yaml"
        path.write_text(CANONICAL_YAML, encoding="utf-8")

        application = codec.load_application(path)

        assert isinstance(application.modules[0], ModulePath)
        assert codec.dumps(application) == CANONICAL_YAML

    def test_json_round_trip(self, tmp_path: Path):
        path = tmp_path / "org.example.Sample.yaml"
        path.write_text(CANONICAL_YAML, encoding="utf-8")
        json_text = codec.dumps(codec.load_application(path), ManifestFormat.JSON)
        json_path = tmp_path / "org.example.Sample.json"
        json_path.write_text(json_text, encoding="utf-8")

        reloaded = codec.load_application(json_path)

        assert json_text.endswith("}\n")
        assert '"name": "ünïcode"' in json_text
        assert '    "id": "org.example.Sample"' in json_text
        assert codec.dumps(reloaded) == json_text
        assert json.loads(json_text)["modules"][2]["x-custom-key"] == "kept"

    def test_json_indent(self):
        text = codec.dumps(Module(name="foo"), ManifestFormat.JSON, json_indent=2)

        assert text == '{\n  "name": "foo"\n}\n'

    def test_dump_sources(self):
        sources = [Source(type="dir", path="./")]

        assert codec.dumps(sources) == "- type: dir\n  path: ./\n"

    def test_single_source_keeps_mapping_shape(self, tmp_path: Path):
        path = tmp_path / "src.json"
        path.write_text('{\n    "type": "dir",\n    "path": "."\n}\n')

        sources = codec.load_manifest(path)

        assert len(sources) == 1
        assert codec.dumps(sources) == path.read_text()
        assert codec.dumps(sources, ManifestFormat.YAML) == "type: dir\npath: .\n"

    def test_one_element_source_list_stays_a_list(self, tmp_path: Path):
        path = tmp_path / "src.json"
        path.write_text('[\n    {\n        "type": "dir",\n        "path": "."\n    }\n]\n')

        assert codec.dumps(codec.load_manifest(path)) == path.read_text()

    def test_dump_failure(self):
        module = Module(name="foo", **{"x-bad": object()})

        with pytest.raises(ManifestSerializationError):
            codec.dumps(module, ManifestFormat.JSON)


class TestWriteManifest:
    def test_write_uses_path_format(self, tmp_path: Path):
        path = tmp_path / "foo.json"

        codec.write_manifest(path, Module(name="foo"))

        assert path.read_text() == '{\n    "name": "foo"\n}\n'

    def test_failed_dump_leaves_file_untouched(self, tmp_path: Path):
        path = tmp_path / "foo.json"
        path.write_text("original")
        module = Module(name="foo", **{"x-bad": object()})

        with pytest.raises(ManifestSerializationError):
            codec.write_manifest(path, module)

        assert path.read_text() == "original"
