"""Module reference resolver.

Replaces every module imported by path with the parsed content of the file
it points to, recursively, so that a manifest can be turned into a single
self-contained tree. Reference order is preserved at every level.

Base directory rule: a module loaded from the reference ``p`` resolves its
own nested references relative to ``dirname(p)``, the directory part of the
reference string itself. It is *not* joined with the directory the reference
was found in. Manifests in the wild rely on this, so it is kept as is.
"""

import os
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple, Union

import structlog

from fpcli.config.models import ResolverConfig
from fpcli.exceptions import (
    CycleDetectedError,
    ManifestNotFoundError,
    ManifestParseError,
    ResolutionDepthError,
    ResolutionError,
)
from fpcli.manifest import codec
from fpcli.manifest.models import Application, Module, ModulePath, ModuleReference

logger = structlog.get_logger(__name__)

ModuleLoader = Callable[[Path], Module]


class ModuleResolver:
    """Resolves module references into inline module descriptions.

    Each call works on copies: inline modules are deep-copied before their
    children are resolved, so the input references are never modified.
    """

    def __init__(
        self,
        config: Optional[ResolverConfig] = None,
        load_module: ModuleLoader = codec.load_module,
    ) -> None:
        self.config = config or ResolverConfig()
        self._load_module = load_module

    def resolve_modules(
        self, base_dir: Union[str, Path], refs: Sequence[ModuleReference]
    ) -> List[Module]:
        """Resolve ``refs`` against ``base_dir``.

        Args:
            base_dir: Directory the path references in ``refs`` are relative to
            refs: Module references in manifest order

        Returns:
            The same references, in the same order, all inline

        Raises:
            ResolutionError: If a referenced file is missing or invalid
            CycleDetectedError: If a manifest file is re-entered
            ResolutionDepthError: If nesting exceeds ``max_depth``
        """
        return self._resolve(Path(base_dir), refs, depth=0, chain=())

    def _resolve(
        self,
        base_dir: Path,
        refs: Sequence[ModuleReference],
        depth: int,
        chain: Tuple[str, ...],
    ) -> List[Module]:
        if refs and depth > self.config.max_depth:
            raise ResolutionDepthError(
                f"Module nesting is deeper than {self.config.max_depth} levels",
                max_depth=self.config.max_depth,
                path=chain[-1] if chain else None,
            )

        resolved: List[Module] = []
        for ref in refs:
            if isinstance(ref, ModulePath):
                resolved.append(self._resolve_path(base_dir, ref.root, depth, chain))
            elif isinstance(ref, Module):
                module = ref.model_copy(deep=True)
                module.modules = self._resolve(base_dir, module.modules, depth + 1, chain)
                resolved.append(module)
            else:
                raise TypeError(f"Unsupported module reference type: {type(ref).__name__}")
        return resolved

    def _resolve_path(
        self, base_dir: Path, reference: str, depth: int, chain: Tuple[str, ...]
    ) -> Module:
        file_path = base_dir / reference
        key = os.path.realpath(file_path)

        if self.config.detect_cycles and key in chain:
            raise CycleDetectedError(
                f"Module reference {reference} loops back to {file_path}",
                reference=reference,
                path=str(file_path),
            )

        logger.debug(
            "Resolving module reference",
            reference=reference,
            path=str(file_path),
            depth=depth,
        )
        try:
            module = self._load_module(file_path)
        except (ManifestNotFoundError, ManifestParseError) as e:
            raise ResolutionError(
                f"Could not resolve module reference {reference}",
                reference=reference,
                path=str(file_path),
                cause=e,
            ) from e

        child_base_dir = Path(os.path.dirname(reference))
        module.modules = self._resolve(
            child_base_dir, module.modules, depth + 1, chain + (key,)
        )
        return module


def resolve_modules(
    base_dir: Union[str, Path],
    refs: Sequence[ModuleReference],
    config: Optional[ResolverConfig] = None,
) -> List[Module]:
    """Resolve ``refs`` against ``base_dir`` with a default resolver."""
    return ModuleResolver(config).resolve_modules(base_dir, refs)


def resolve_application(
    manifest_path: Union[str, Path],
    application: Application,
    config: Optional[ResolverConfig] = None,
) -> Application:
    """Resolve the modules of an application loaded from ``manifest_path``.

    Path references are relative to the directory holding the manifest.
    The application's module list is replaced with the resolved one.
    """
    base_dir = Path(manifest_path).parent
    application.modules = ModuleResolver(config).resolve_modules(
        base_dir, application.modules
    )
    logger.info("Resolved modules", id=application.get_id(), count=len(application.modules))
    return application


def resolve_module_document(
    manifest_path: Union[str, Path],
    module: Module,
    config: Optional[ResolverConfig] = None,
) -> Module:
    """Resolve a standalone module manifest, treating it as the tree root."""
    base_dir = Path(manifest_path).parent
    (resolved,) = ModuleResolver(config).resolve_modules(base_dir, [module])
    logger.info("Resolved modules", name=resolved.name, count=len(resolved.modules))
    return resolved
