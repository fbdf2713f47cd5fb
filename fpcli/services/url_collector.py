"""Source URL collection.

Walks the inline part of a manifest and lists the URLs its sources point
to. Path references are not followed; resolve the manifest first to include
the sources of imported modules.
"""

from typing import Iterable, Iterator, List, Optional, Sequence, Union

from fpcli.manifest.models import Application, Module, Source, SourceType


def source_urls(
    source: Source,
    include_mirror_urls: bool = False,
    source_types: Optional[Iterable[SourceType]] = None,
) -> List[str]:
    """Return the URLs of one source, primary URL first."""
    if source_types is not None and source.type not in set(source_types):
        return []

    urls: List[str] = []
    if source.url:
        urls.append(source.url)
    if include_mirror_urls:
        urls.extend(source.mirror_urls)
    return urls


def _iter_module_urls(
    module: Module,
    include_mirror_urls: bool,
    source_types: Optional[List[SourceType]],
) -> Iterator[str]:
    for source in module.sources:
        if isinstance(source, Source):
            yield from source_urls(source, include_mirror_urls, source_types)
    for child in module.modules:
        if isinstance(child, Module):
            yield from _iter_module_urls(child, include_mirror_urls, source_types)


def collect_urls(
    document: Union[Application, Module, Sequence[Source]],
    include_mirror_urls: bool = False,
    source_types: Optional[Iterable[SourceType]] = None,
) -> List[str]:
    """Collect every source URL of a document, in manifest order.

    Args:
        document: Application, module, or list of sources
        include_mirror_urls: Also list each source's ``mirror-urls``
        source_types: Only include sources of these types

    Returns:
        URLs in the order they appear; duplicates are kept
    """
    types = list(source_types) if source_types is not None else None

    if isinstance(document, Application):
        urls: List[str] = []
        for module in document.modules:
            if isinstance(module, Module):
                urls.extend(_iter_module_urls(module, include_mirror_urls, types))
        return urls
    if isinstance(document, Module):
        return list(_iter_module_urls(document, include_mirror_urls, types))

    urls = []
    for source in document:
        urls.extend(source_urls(source, include_mirror_urls, types))
    return urls
