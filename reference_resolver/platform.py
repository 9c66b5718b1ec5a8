"""
Host implementations of the platform interfaces.

HostPlatform reads the real operating system; the registry is only
consulted on Windows. Other hosts simply report no assembly folders and no
runtime directory, which the resolver treats as "contributes nothing".
"""

import logging
import os
import sys
from collections.abc import Iterator
from typing import Any

from .diagnostics import DISCOVERY_FAILED
from .exceptions import AssemblyLoadError
from .exceptions import ProbeError
from .interfaces import PlatformCapabilities

logger = logging.getLogger(__name__)

NETFRAMEWORK_REGISTRY_KEY = r"Software\Microsoft\.NetFramework"
RUNTIME_VERSION_DIRECTORY = "v4.0.30319"

# Windows error code EnumKey uses to end a subkey listing
ERROR_NO_MORE_ITEMS = 259


class HostPlatform:
    """PlatformCapabilities backed by ``os`` and, on Windows, ``winreg``."""

    def is_windows_like(self) -> bool:
        return os.name == "nt"

    def getenv(self, name: str) -> str | None:
        return os.environ.get(name)

    def enumerate_assembly_folders(self) -> list[str]:
        """Read AssemblyFoldersEx and AssemblyFolders entries from HKLM."""
        if not self.is_windows_like():
            return []

        winreg = _import_winreg()

        try:
            root = winreg.OpenKey(winreg.HKEY_LOCAL_MACHINE, NETFRAMEWORK_REGISTRY_KEY)
        except FileNotFoundError:
            logger.debug(f"Registry key not present: HKLM\\{NETFRAMEWORK_REGISTRY_KEY}")
            return []

        try:
            with root:
                return list(_registry_assembly_folders(winreg, root))
        except OSError as e:
            raise ProbeError(
                f"Could not read assembly folders from registry: {e}",
                code=DISCOVERY_FAILED,
            ) from e

    def runtime_directory(self) -> str | None:
        windir = self.getenv("WINDIR")
        if not self.is_windows_like() or not windir:
            return None

        # Prefer the runtime matching this process' bitness
        frameworks = ["Framework64", "Framework"] if sys.maxsize > 2**32 else ["Framework"]
        for framework in frameworks:
            candidate = os.path.join(windir, "Microsoft.NET", framework, RUNTIME_VERSION_DIRECTORY)
            if os.path.isdir(candidate):
                return candidate
        return None


def _import_winreg() -> Any:
    import winreg

    return winreg


def _registry_assembly_folders(winreg: Any, root: Any) -> Iterator[str]:
    for version_name in _subkey_names(winreg, root):
        with winreg.OpenKey(root, version_name) as version_key:
            try:
                folders_ex = winreg.OpenKey(version_key, "AssemblyFoldersEx")
            except FileNotFoundError:
                continue
            with folders_ex:
                yield from _default_values(winreg, folders_ex)

    try:
        folders = winreg.OpenKey(root, "AssemblyFolders")
    except FileNotFoundError:
        return
    with folders:
        yield from _default_values(winreg, folders)


def _subkey_names(winreg: Any, key: Any) -> Iterator[str]:
    index = 0
    while True:
        try:
            name = winreg.EnumKey(key, index)
        except OSError as e:
            # EnumKey signals the end of the list with ERROR_NO_MORE_ITEMS
            if getattr(e, "winerror", ERROR_NO_MORE_ITEMS) != ERROR_NO_MORE_ITEMS:
                raise
            return
        yield name
        index += 1


def _default_values(winreg: Any, key: Any) -> Iterator[str]:
    for name in _subkey_names(winreg, key):
        with winreg.OpenKey(key, name) as subkey:
            try:
                value, _kind = winreg.QueryValueEx(subkey, "")
            except FileNotFoundError:
                continue
            if isinstance(value, str):
                yield value


class LocalFileSystem:
    """FileSystem backed by the real disk."""

    def file_exists(self, path: str) -> bool:
        return os.path.isfile(path)

    def directory_exists(self, path: str) -> bool:
        return os.path.isdir(path)

    def list_directories(self, path: str) -> list[str]:
        with os.scandir(path) as entries:
            return sorted(entry.path for entry in entries if entry.is_dir())


class NullAssemblyLoader:
    """AssemblyLoader for hosts without an assembly runtime: never loads anything."""

    def load(self, descriptor: str) -> str:
        raise AssemblyLoadError(f"No assembly runtime available to load {descriptor!r}")


def program_files_directory(platform: PlatformCapabilities) -> str | None:
    """ProgramFiles(x86), falling back to ProgramFiles on 32-bit hosts."""
    return platform.getenv("ProgramFiles(x86)") or platform.getenv("ProgramFiles")


def reference_assemblies_root(platform: PlatformCapabilities) -> str:
    """Root of the framework reference assemblies, "" on non-Windows hosts."""
    if not platform.is_windows_like():
        return ""
    program_files = program_files_directory(platform)
    if not program_files:
        return ""
    return os.path.join(program_files, "Reference Assemblies", "Microsoft", "Framework", ".NETFramework")


class NullPlatform:
    """PlatformCapabilities for a host with nothing to discover."""

    def is_windows_like(self) -> bool:
        return False

    def getenv(self, name: str) -> str | None:
        return None

    def enumerate_assembly_folders(self) -> list[str]:
        return []

    def runtime_directory(self) -> str | None:
        return None
