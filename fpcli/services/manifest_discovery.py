"""Find Flatpak application manifests below a directory."""

import os
from pathlib import Path
from typing import Iterator, List, Union

import structlog

from fpcli.exceptions import ManifestError
from fpcli.manifest.codec import load_application
from fpcli.manifest.models import Application

logger = structlog.get_logger(__name__)

SKIPPED_DIRECTORIES = frozenset({".git"})
MANIFEST_SUFFIXES = frozenset({".json", ".yaml", ".yml"})


def iter_manifest_candidates(root: Union[str, Path]) -> Iterator[Path]:
    """Yield files with a manifest extension, in sorted walk order."""
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d not in SKIPPED_DIRECTORIES)
        for filename in sorted(filenames):
            if Path(filename).suffix.lower() in MANIFEST_SUFFIXES:
                yield Path(dirpath) / filename


def find_applications(root: Union[str, Path] = ".") -> Iterator[tuple[Path, Application]]:
    """Yield ``(path, application)`` for every application manifest below ``root``.

    Files that cannot be read or are not application manifests are skipped.
    """
    for path in iter_manifest_candidates(root):
        try:
            application = load_application(path)
        except ManifestError as e:
            logger.debug("Skipping file", path=str(path), reason=e.message)
            continue
        yield path, application


def list_application_paths(root: Union[str, Path] = ".") -> List[Path]:
    return [path for path, _ in find_applications(root)]
