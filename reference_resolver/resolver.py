"""
Built-in reference resolver.

Simulates the build tool's assembly resolution with a fixed strategy chain
over a candidate directory list. Used whenever no external resolver is
selected (see selection.get_default_resolver).
"""

import logging
from collections.abc import Sequence

from .interfaces import AssemblyLoader
from .interfaces import FileSystem
from .interfaces import PlatformCapabilities
from .models import ReferenceRequest
from .models import ResolutionConfig
from .models import ResolvedReference
from .platform import HostPlatform
from .platform import LocalFileSystem
from .platform import NullAssemblyLoader
from .platform import reference_assemblies_root
from .search_paths import build_search_paths
from .strategies import ProbeContext
from .strategies import StrategyChain

logger = logging.getLogger(__name__)

HIGHEST_INSTALLED_FRAMEWORK_VERSION = "v4.5"


class SimulatedResolver:
    """
    Resolver implementation that needs no build tooling.

    Every collaborator is injectable; the defaults read the real host. Pass
    ``platform=NullPlatform()`` to run without any platform discovery (no
    registry folders, no shared cache, no versioned core library lookup).

    Nothing is cached between calls: each ``resolve`` rebuilds the candidate
    directory list from its configuration.
    """

    def __init__(
        self,
        platform: PlatformCapabilities | None = None,
        file_system: FileSystem | None = None,
        assembly_loader: AssemblyLoader | None = None,
        chain: StrategyChain | None = None,
    ):
        """
        Initialize resolver.

        Args:
            platform: Platform capabilities (default: HostPlatform)
            file_system: File-system probes (default: LocalFileSystem)
            assembly_loader: Load-by-descriptor facility (default: NullAssemblyLoader)
            chain: Strategy chain (default: the five built-in strategies)
        """
        self.platform = platform or HostPlatform()
        self.file_system = file_system or LocalFileSystem()
        self.assembly_loader = assembly_loader or NullAssemblyLoader()
        self.chain = chain or StrategyChain()

    def highest_installed_framework_version(self) -> str:
        return HIGHEST_INSTALLED_FRAMEWORK_VERSION

    @property
    def reference_assemblies_root_directory(self) -> str:
        return reference_assemblies_root(self.platform)

    def resolve(
        self,
        config: ResolutionConfig,
        references: Sequence[ReferenceRequest],
    ) -> list[ResolvedReference]:
        """
        Resolve references in input order.

        Args:
            config: Per-call configuration
            references: Requests to resolve

        Returns:
            One ResolvedReference per request that located an existing file,
            in input order. Unresolved requests are omitted without error.
        """
        search_paths = build_search_paths(config, self.platform)
        context = ProbeContext(
            config=config,
            search_paths=tuple(search_paths),
            file_system=self.file_system,
            assembly_loader=self.assembly_loader,
            platform=self.platform,
        )

        results = []
        for request in references:
            resolved = self.chain.run(request, context)
            if resolved is not None:
                results.append(resolved)

        logger.debug(f"Resolved {len(results)} of {len(references)} references")
        return results
