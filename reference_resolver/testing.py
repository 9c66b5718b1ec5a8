"""
Testing utilities for reference resolution.
Provides in-memory collaborators so resolution can be exercised without a
real Windows host, registry or assembly runtime.
"""

import os
from collections.abc import Callable
from collections.abc import Iterable
from typing import Any

from .diagnostics import DISCOVERY_FAILED
from .exceptions import AssemblyLoadError
from .exceptions import ProbeError
from .interfaces import Resolver
from .platform import LocalFileSystem


class StaticPlatform:
    """PlatformCapabilities with fixed answers.

    Setting ``discovery_error`` makes assembly folder enumeration raise it,
    simulating an unreadable registry.
    """

    def __init__(
        self,
        windows_like: bool = True,
        environ: dict[str, str] | None = None,
        assembly_folders: Iterable[str] = (),
        runtime_directory: str | None = None,
        discovery_error: Exception | None = None,
    ):
        self.windows_like = windows_like
        self.environ = dict(environ or {})
        self.assembly_folders = list(assembly_folders)
        self._runtime_directory = runtime_directory
        self.discovery_error = discovery_error
        self.discovery_calls = 0

    def is_windows_like(self) -> bool:
        return self.windows_like

    def getenv(self, name: str) -> str | None:
        return self.environ.get(name)

    def enumerate_assembly_folders(self) -> list[str]:
        self.discovery_calls += 1
        if self.discovery_error is not None:
            raise self.discovery_error
        return list(self.assembly_folders)

    def runtime_directory(self) -> str | None:
        return self._runtime_directory


class CountingFileSystem(LocalFileSystem):
    """LocalFileSystem that records every probe.

    Paths listed in ``failing_paths`` raise OSError when probed.
    """

    def __init__(self, failing_paths: Iterable[str] = ()):
        self.probes: list[tuple[str, str]] = []
        self.failing_paths = set(failing_paths)

    def _record(self, kind: str, path: str) -> None:
        self.probes.append((kind, path))
        if path in self.failing_paths:
            raise PermissionError(f"Permission denied: {path}")

    def file_exists(self, path: str) -> bool:
        self._record("file", path)
        return super().file_exists(path)

    def directory_exists(self, path: str) -> bool:
        self._record("directory", path)
        return super().directory_exists(path)

    def list_directories(self, path: str) -> list[str]:
        self._record("list", path)
        return super().list_directories(path)

    @property
    def probed_paths(self) -> list[str]:
        return [path for _kind, path in self.probes]

    def probes_under(self, directory: str) -> list[str]:
        """Probed paths inside ``directory``."""
        prefix = directory.rstrip("\\/") + os.sep
        return [path for path in self.probed_paths if path.startswith(prefix)]


class StaticAssemblyLoader:
    """AssemblyLoader answering from a descriptor -> location mapping."""

    def __init__(self, locations: dict[str, str] | None = None, error: Exception | None = None):
        self.locations = dict(locations or {})
        self.error = error
        self.requests: list[str] = []

    def load(self, descriptor: str) -> str:
        self.requests.append(descriptor)
        if self.error is not None:
            raise self.error
        try:
            return self.locations[descriptor]
        except KeyError:
            raise AssemblyLoadError(f"Could not load {descriptor!r}") from None


class LogRecorder:
    """Captures the three resolution sinks.

    Pass ``**recorder.sinks()`` into ResolutionConfig.
    """

    def __init__(self):
        self.messages: list[str] = []
        self.warnings: list[tuple[str, str]] = []
        self.errors: list[tuple[str, str]] = []

    def log_message(self, text: str) -> None:
        self.messages.append(text)

    def log_warning(self, code: str, text: str) -> None:
        self.warnings.append((code, text))

    def log_error(self, code: str, text: str) -> None:
        self.errors.append((code, text))

    def sinks(self) -> dict[str, Callable[..., None]]:
        return {
            "log_message": self.log_message,
            "log_warning": self.log_warning,
            "log_error": self.log_error,
        }

    @property
    def warning_codes(self) -> list[str]:
        return [code for code, _text in self.warnings]


class StaticResolverProvider:
    """ResolverProvider returning a fixed object (or raising)."""

    def __init__(self, version: str, resolver: Any = None, error: Exception | None = None):
        self._version = version
        self.resolver = resolver
        self.error = error
        self.create_calls = 0

    @property
    def version(self) -> str:
        return self._version

    @property
    def source(self) -> str:
        return "static"

    def try_create(self) -> Resolver | None:
        self.create_calls += 1
        if self.error is not None:
            raise self.error
        return self.resolver


def registry_failure(message: str = "registry unavailable") -> ProbeError:
    """A discovery error as HostPlatform reports it."""
    return ProbeError(message, code=DISCOVERY_FAILED)
