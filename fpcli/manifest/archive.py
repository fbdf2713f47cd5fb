"""Project name heuristics for archive URLs.

Used by the bootstrap generator to name a module after the archive it is
built from, e.g. ``https://download.gnome.org/sources/gtk/4.6/gtk-4.6.0.tar.xz``
gives ``gtk``.
"""

import re
from typing import List, Optional
from urllib.parse import urlparse

# Longest first so ".tar.gz" wins over ".gz".
ARCHIVE_EXTENSIONS = (
    ".tar.bz2",
    ".tar.zst",
    ".tar.gz",
    ".tar.lz",
    ".tar.xz",
    ".tbz2",
    ".tar",
    ".tgz",
    ".txz",
    ".zip",
    ".bz2",
    ".deb",
    ".rpm",
    ".7z",
    ".gz",
    ".xz",
)

# Forge URL layouts where the project name sits right before a marker segment:
#   github.com/<owner>/<project>/archive/<ref>.tar.gz
#   github.com/<owner>/<project>/releases/download/<tag>/<file>
#   gitlab.com/<owner>/<project>/-/archive/<ref>/<file>
FORGE_MARKERS = ("archive", "releases")

_VERSION_SPLIT = re.compile(r"^(?P<name>.+?)[-_.]v?\d")
_STARTS_WITH_VERSION = re.compile(r"^v?\d")


def strip_archive_extension(filename: str) -> str:
    """Remove a known archive extension from ``filename``, if any."""
    lowered = filename.lower()
    for extension in ARCHIVE_EXTENSIONS:
        if lowered.endswith(extension):
            return filename[: -len(extension)]
    return filename


def _path_segments(url: str) -> List[str]:
    return [segment for segment in urlparse(url).path.split("/") if segment]


def _project_from_forge_layout(segments: List[str]) -> Optional[str]:
    for marker in FORGE_MARKERS:
        if marker not in segments:
            continue
        index = segments.index(marker)
        candidates = [s for s in segments[:index] if s != "-"]
        if len(candidates) >= 2:
            return candidates[-1]
    return None


def get_project_name_from_url(url: str) -> Optional[str]:
    """Guess the project name of an archive URL.

    Returns:
        The project name, or None when the URL carries no usable name
        (for instance when the file name is only a version number).
    """
    segments = _path_segments(url)
    if not segments:
        return None

    forge_project = _project_from_forge_layout(segments)
    if forge_project:
        return forge_project

    stem = strip_archive_extension(segments[-1])
    if not stem or _STARTS_WITH_VERSION.match(stem):
        return None

    match = _VERSION_SPLIT.match(stem)
    if match:
        return match.group("name")
    return stem
