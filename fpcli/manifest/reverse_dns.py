"""Reverse DNS helpers.

Flatpak application ids are reverse DNS names (``org.gnome.Maps``), and
manifests are usually stored in a file named after the id.
"""

import re
from pathlib import PurePosixPath
from typing import List
from urllib.parse import urlparse

MANIFEST_EXTENSIONS = (".json", ".yaml", ".yml")

# Generic top-level domains commonly used as the first element of an app id.
# Any two-letter country code is accepted as well.
KNOWN_TLDS = frozenset(
    {
        "app",
        "com",
        "dev",
        "edu",
        "gov",
        "info",
        "io",
        "me",
        "net",
        "org",
        "page",
        "site",
        "space",
        "tech",
        "xyz",
    }
)

_ELEMENT = re.compile(r"^[A-Za-z0-9_-]+$")
_COUNTRY_CODE = re.compile(r"^[a-z]{2}$")
_SCP_URL = re.compile(r"^[\w.-]+@(?P<host>[^:/]+):(?P<path>.+)$")


def _host_and_path(url: str) -> tuple[str, str]:
    scp = _SCP_URL.match(url)
    if scp:
        return scp.group("host"), scp.group("path")
    if "://" not in url:
        url = "//" + url
    parsed = urlparse(url)
    return parsed.hostname or "", parsed.path


def from_url(url: str) -> str:
    """Convert a URL to its reverse DNS equivalent.

    Example:
        >>> from_url("https://github.com/louib/fpcli.git")
        'com.github.louib.fpcli'
    """
    host, path = _host_and_path(url.strip())
    host_parts: List[str] = [part for part in host.lower().split(".") if part]
    if host_parts and host_parts[0] == "www":
        host_parts = host_parts[1:]

    path_parts = [part for part in path.split("/") if part]
    if path_parts and path_parts[-1].endswith(".git"):
        path_parts[-1] = path_parts[-1][: -len(".git")]

    return ".".join(list(reversed(host_parts)) + [p for p in path_parts if p])


def is_reverse_dns(value: str) -> bool:
    """Test whether a name, or the file name of a path, is a reverse DNS id."""
    name = PurePosixPath(value.replace("\\", "/")).name
    for extension in MANIFEST_EXTENSIONS:
        if name.lower().endswith(extension):
            name = name[: -len(extension)]
            break

    parts = name.split(".")
    if len(parts) < 3:
        return False
    if not all(_ELEMENT.match(part) for part in parts):
        return False

    tld = parts[0]
    return tld in KNOWN_TLDS or bool(_COUNTRY_CODE.match(tld))
