"""
Manifest codec.

Reads manifest files into the pydantic object model and writes documents
back out as JSON or YAML. The output is canonical: dumping a document that
was loaded from canonical text reproduces that text byte for byte, which is
what ``fpcli lint --check`` relies on.
"""

import json
from pathlib import Path
from typing import Any, List, Optional, Union

import structlog
import yaml
from pydantic import ValidationError

from fpcli.exceptions import (
    ManifestNotFoundError,
    ManifestParseError,
    ManifestSerializationError,
)

from .models import Application, ManifestFormat, ManifestModel, Module, Source

logger = structlog.get_logger(__name__)

DEFAULT_JSON_INDENT = 4

_EXTENSION_FORMATS = {
    ".json": ManifestFormat.JSON,
    ".yaml": ManifestFormat.YAML,
    ".yml": ManifestFormat.YAML,
}

ManifestDocument = Union[Application, Module, List[Source]]


class _ManifestDumper(yaml.SafeDumper):
    """Safe dumper that indents block sequences under their parent key."""

    def increase_indent(self, flow: bool = False, indentless: bool = False) -> Any:
        return super().increase_indent(flow, False)


def detect_format(path: Union[str, Path]) -> ManifestFormat:
    """Return the manifest format implied by a file extension.

    Raises:
        ManifestParseError: If the extension is not a known manifest format
    """
    suffix = Path(path).suffix.lower()
    try:
        return _EXTENSION_FORMATS[suffix]
    except KeyError:
        raise ManifestParseError(
            f"Unsupported manifest extension '{suffix}'",
            path=str(path),
            recovery_suggestion="Use a .json, .yaml or .yml file",
        ) from None


def parse_format(name: str) -> ManifestFormat:
    """Return the manifest format named by ``name`` (``json``, ``yaml``, ``yml``)."""
    normalized = name.strip().lower().lstrip(".")
    if normalized == "yml":
        normalized = "yaml"
    try:
        return ManifestFormat(normalized)
    except ValueError:
        raise ManifestParseError(f"Invalid manifest format '{name}'") from None


def read_text(path: Union[str, Path]) -> str:
    """Read a manifest file as text.

    Raises:
        ManifestNotFoundError: If the file is missing or unreadable
        ManifestParseError: If the file is not valid UTF-8
    """
    try:
        return Path(path).read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ManifestNotFoundError(
            f"Manifest file {path} does not exist", path=str(path), cause=e
        ) from e
    except UnicodeDecodeError as e:
        raise ManifestParseError(
            f"Manifest file {path} is not valid UTF-8", path=str(path), cause=e
        ) from e
    except OSError as e:
        raise ManifestNotFoundError(
            f"Could not read manifest file {path}", path=str(path), cause=e
        ) from e


def parse_text(text: str, manifest_format: ManifestFormat, path: str = "<string>") -> Any:
    """Decode manifest text into plain Python data."""
    try:
        if manifest_format == ManifestFormat.JSON:
            return json.loads(text)
        return yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ManifestParseError(
            f"Could not parse {manifest_format.value.upper()} manifest {path}",
            path=path,
            cause=e,
        ) from e


def _read_data(path: Union[str, Path]) -> tuple[Any, ManifestFormat]:
    text = read_text(path)
    manifest_format = detect_format(path)
    return parse_text(text, manifest_format, str(path)), manifest_format


def is_application_data(data: Any) -> bool:
    """An application manifest declares an ``id`` or ``app-id``."""
    return isinstance(data, dict) and ("id" in data or "app-id" in data)


def is_module_data(data: Any) -> bool:
    """A module manifest has a ``name`` and no application id."""
    return isinstance(data, dict) and "name" in data and not is_application_data(data)


def is_sources_data(data: Any) -> bool:
    """A sources manifest is one source mapping or a list of them."""
    if isinstance(data, dict):
        return "type" in data and "name" not in data and not is_application_data(data)
    if isinstance(data, list):
        return bool(data) and all(
            isinstance(item, dict) and "type" in item for item in data
        )
    return False


def _validate(model: type, data: Any, path: str, kind: str) -> Any:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise ManifestParseError(
            f"Invalid Flatpak {kind} manifest {path}", path=path, cause=e
        ) from e


def application_from_data(
    data: Any, manifest_format: ManifestFormat, path: str = "<string>"
) -> Application:
    """Build an Application from decoded manifest data."""
    if not is_application_data(data):
        raise ManifestParseError(
            f"{path} is not a Flatpak application manifest", path=path
        )
    application = _validate(Application, data, path, "application")
    application.set_format(manifest_format)
    return application


def module_from_data(
    data: Any, manifest_format: ManifestFormat, path: str = "<string>"
) -> Module:
    """Build a Module from decoded manifest data."""
    if not is_module_data(data):
        raise ManifestParseError(f"{path} is not a Flatpak module manifest", path=path)
    module = _validate(Module, data, path, "module")
    module.set_format(manifest_format)
    return module


def sources_from_data(
    data: Any, manifest_format: ManifestFormat, path: str = "<string>"
) -> List[Source]:
    """Build a list of Sources from decoded manifest data.

    A document holding a single source mapping gives a one-element list
    that is dumped back as a mapping.
    """
    if not is_sources_data(data):
        raise ManifestParseError(f"{path} is not a Flatpak source manifest", path=path)
    single = isinstance(data, dict)
    items = [data] if single else data
    sources = [_validate(Source, item, path, "source") for item in items]
    for source in sources:
        source.set_format(manifest_format)
        source._single_document = single
    return sources


def load_application(path: Union[str, Path]) -> Application:
    """Load an application manifest from disk."""
    data, manifest_format = _read_data(path)
    application = application_from_data(data, manifest_format, str(path))
    logger.debug("Loaded application manifest", path=str(path), id=application.get_id())
    return application


def load_module(path: Union[str, Path]) -> Module:
    """Load a module manifest from disk."""
    data, manifest_format = _read_data(path)
    module = module_from_data(data, manifest_format, str(path))
    logger.debug("Loaded module manifest", path=str(path), name=module.name)
    return module


def load_sources(path: Union[str, Path]) -> List[Source]:
    """Load a source manifest, which may hold one source or a list of them."""
    data, manifest_format = _read_data(path)
    sources = sources_from_data(data, manifest_format, str(path))
    logger.debug("Loaded source manifest", path=str(path), count=len(sources))
    return sources


def load_manifest(path: Union[str, Path]) -> ManifestDocument:
    """Load any kind of manifest, trying application, module then sources.

    Raises:
        ManifestNotFoundError: If the file cannot be read
        ManifestParseError: If the content is not a manifest of any kind
    """
    data, manifest_format = _read_data(path)
    if is_application_data(data):
        return application_from_data(data, manifest_format, str(path))
    if is_module_data(data):
        return module_from_data(data, manifest_format, str(path))
    if is_sources_data(data):
        return sources_from_data(data, manifest_format, str(path))
    raise ManifestParseError(f"{path} is not a Flatpak manifest", path=str(path))


def to_data(document: Union[ManifestModel, List[Source]]) -> Any:
    """Convert a document to plain JSON-compatible data using manifest keys."""
    if isinstance(document, list):
        if len(document) == 1 and document[0]._single_document:
            return to_data(document[0])
        return [to_data(item) for item in document]
    return document.model_dump(mode="json", by_alias=True)


def dumps(
    document: Union[ManifestModel, List[Source]],
    manifest_format: Optional[ManifestFormat] = None,
    json_indent: int = DEFAULT_JSON_INDENT,
) -> str:
    """Serialize a document in canonical form.

    Args:
        document: Application, module, or list of sources
        manifest_format: Output format; defaults to the document's own format
        json_indent: Spaces per indentation level for JSON output

    Raises:
        ManifestSerializationError: If the document cannot be encoded
    """
    if manifest_format is None:
        if isinstance(document, list):
            manifest_format = (
                document[0].manifest_format if document else ManifestFormat.YAML
            )
        else:
            manifest_format = document.manifest_format

    try:
        data = to_data(document)
        if manifest_format == ManifestFormat.JSON:
            return json.dumps(data, indent=json_indent, ensure_ascii=False) + "\n"
        return yaml.dump(
            data,
            Dumper=_ManifestDumper,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
            width=float("inf"),
        )
    except (TypeError, ValueError, yaml.YAMLError) as e:
        raise ManifestSerializationError(
            f"Could not dump manifest as {manifest_format.value.upper()}", cause=e
        ) from e


def write_manifest(
    path: Union[str, Path],
    document: Union[ManifestModel, List[Source]],
    json_indent: int = DEFAULT_JSON_INDENT,
) -> None:
    """Write a document to ``path`` in the format implied by its extension.

    The text is fully serialized before the file is opened, so a
    serialization failure leaves the file untouched.
    """
    manifest_format = detect_format(path)
    text = dumps(document, manifest_format, json_indent=json_indent)
    try:
        Path(path).write_text(text, encoding="utf-8")
    except OSError as e:
        raise ManifestSerializationError(
            f"Could not write file {path}", path=str(path), cause=e
        ) from e
    logger.debug("Wrote manifest", path=str(path), format=manifest_format.value)
