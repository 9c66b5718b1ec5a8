"""
Standard interfaces for reference resolution.
Uses Protocol classes for structural subtyping (no inheritance required).

Everything the resolver reads from its host (operating system, environment,
registry, file system, assembly runtime) comes through one of these, so a
resolution is a pure function of its explicit inputs.
"""

from collections.abc import Sequence
from typing import Protocol
from typing import runtime_checkable

from .models import ReferenceRequest
from .models import ResolutionConfig
from .models import ResolvedReference


@runtime_checkable
class Resolver(Protocol):
    """Interface for reference resolvers (built-in or externally provided)."""

    def highest_installed_framework_version(self) -> str:
        """
        Get the "v4.5.1"-style moniker for the highest installed framework.

        This is the target framework version used when the caller has no
        explicit core library to pin against.
        """
        ...

    @property
    def reference_assemblies_root_directory(self) -> str:
        """Reference-assemblies root for the framework, "" when the host has none."""
        ...

    def resolve(
        self,
        config: ResolutionConfig,
        references: Sequence[ReferenceRequest],
    ) -> list[ResolvedReference]:
        """
        Resolve references to file locations.

        Args:
            config: Per-call configuration (directories, sinks, budget)
            references: Requests in priority order

        Returns:
            Resolved references in input order; unresolved requests are omitted
        """
        ...


@runtime_checkable
class PlatformCapabilities(Protocol):
    """Read-only view of the host operating system."""

    def is_windows_like(self) -> bool:
        """True when Windows conventions (registry, shared cache) apply."""
        ...

    def getenv(self, name: str) -> str | None:
        """Read an environment variable, None if unset."""
        ...

    def enumerate_assembly_folders(self) -> list[str]:
        """
        List platform-registered assembly folders.

        Returns:
            Directories in registry order (empty if the host has none)

        Raises:
            ProbeError: Registry access failed
        """
        ...

    def runtime_directory(self) -> str | None:
        """Directory of the installed framework runtime, None if absent."""
        ...


@runtime_checkable
class FileSystem(Protocol):
    """Read-only file-system probes used by the strategies."""

    def file_exists(self, path: str) -> bool:
        ...

    def directory_exists(self, path: str) -> bool:
        ...

    def list_directories(self, path: str) -> list[str]:
        """Full paths of the immediate subdirectories of ``path``."""
        ...


@runtime_checkable
class AssemblyLoader(Protocol):
    """Host runtime facility that loads an assembly by descriptor."""

    def load(self, descriptor: str) -> str:
        """
        Load an assembly and report where it came from.

        Args:
            descriptor: Strong-name descriptor text

        Returns:
            File location of the loaded assembly

        Raises:
            AssemblyLoadError: Assembly could not be loaded
        """
        ...


@runtime_checkable
class ResolverProvider(Protocol):
    """An alternate resolver implementation keyed by version."""

    @property
    def version(self) -> str:
        """Version key, e.g. "12"."""
        ...

    @property
    def source(self) -> str:
        """Where the resolver comes from, for display."""
        ...

    def try_create(self) -> Resolver | None:
        """Create the resolver, or None if it is not available on this host."""
        ...
