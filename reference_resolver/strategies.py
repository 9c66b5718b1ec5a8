"""
Resolution strategies and the per-reference strategy chain.

Each strategy turns reference text into a ProbeOutcome. The chain tries
them in a fixed order and stops at the first one that resolves:

1. Absolute path      - rooted text naming an existing file
2. Versioned core lib - "<core library>, Version=..." under Reference Assemblies
3. Descriptor load    - descriptors (text with a comma) via the assembly loader
4. Search paths       - <file name> joined against each candidate directory
5. Shared cache       - versioned layout under the platform assembly cache

Strategy failures never abort the chain. I/O failures are reported through
the warning sink; descriptor parse and load failures are quiet.
"""

import logging
import os
import time
from collections.abc import Callable
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import PurePosixPath
from pathlib import PureWindowsPath
from typing import Protocol

from .diagnostics import PROBE_BUDGET_EXCEEDED
from .diagnostics import PROBE_FAILED
from .diagnostics import emit_message
from .diagnostics import emit_warning
from .exceptions import DescriptorParseError
from .exceptions import ProbeError
from .interfaces import AssemblyLoader
from .interfaces import FileSystem
from .interfaces import PlatformCapabilities
from .models import ProbeOutcome
from .models import ProbeStatus
from .models import ReferenceRequest
from .models import ResolutionConfig
from .models import ResolvedReference
from .names import AssemblyName
from .names import parse_assembly_name
from .platform import program_files_directory

logger = logging.getLogger(__name__)

BINARY_MODULE_EXTENSIONS = (".dll", ".exe")
DEFAULT_EXTENSION = ".dll"

# Under ProgramFiles; the descriptor version is appended
CORE_LIBRARY_REFERENCE_ROOT = ("Reference Assemblies", "Microsoft", "FSharp", ".NETFramework", "v4.0")
SHARED_CACHE_VERSION_PREFIX = "v4.0_"


@dataclass(frozen=True)
class ProbeContext:
    """Read-only inputs shared by every strategy during one resolve call."""

    config: ResolutionConfig
    search_paths: Sequence[str]
    file_system: FileSystem
    assembly_loader: AssemblyLoader
    platform: PlatformCapabilities | None = None

    @property
    def windows_like(self) -> bool:
        return self.platform is not None and self.platform.is_windows_like()


class ResolutionStrategy(Protocol):
    """One step of the strategy chain."""

    name: str

    def probe(self, text: str, context: ProbeContext) -> ProbeOutcome:
        """
        Try to locate ``text``.

        Raises:
            ProbeError, OSError: Converted to a failed outcome by the chain
        """
        ...


def is_file_name(text: str) -> bool:
    """True if text already carries a binary-module extension."""
    return text.lower().endswith(BINARY_MODULE_EXTENSIONS)


def reference_file_name(text: str) -> str:
    """File name searched for in candidate directories."""
    if is_file_name(text):
        return text
    return AssemblyName.simple_name(text) + DEFAULT_EXTENSION


def is_rooted(text: str, windows_like: bool) -> bool:
    """True for absolute or drive/root-relative paths."""
    path = PureWindowsPath(text) if windows_like else PurePosixPath(text)
    return bool(path.drive or path.root)


def _parse_quietly(text: str) -> AssemblyName | None:
    try:
        return parse_assembly_name(text)
    except DescriptorParseError as e:
        logger.debug(f"Not a strong-name descriptor: {e}")
        return None


class AbsolutePathStrategy:
    """Rooted text naming an existing file resolves to itself, verbatim."""

    name = "absolute-path"

    def probe(self, text: str, context: ProbeContext) -> ProbeOutcome:
        if is_rooted(text, context.windows_like) and context.file_system.file_exists(text):
            return ProbeOutcome.resolved(text)
        return ProbeOutcome.not_found()


class VersionedCoreLibraryStrategy:
    """Pin "<core library>, Version=x" to its version-specific reference directory.

    The version must match exactly, so this runs before any load or search.
    """

    name = "versioned-core-library"

    def probe(self, text: str, context: ProbeContext) -> ProbeOutcome:
        prefix = f"{context.config.core_library_name}, Version="
        if not text.startswith(prefix) or not context.windows_like:
            return ProbeOutcome.not_found()

        assembly = _parse_quietly(text)
        program_files = program_files_directory(context.platform)
        if assembly is None or assembly.version is None or not program_files:
            return ProbeOutcome.not_found()

        directory = os.path.join(program_files, *CORE_LIBRARY_REFERENCE_ROOT, assembly.version)
        trial_path = os.path.join(directory, assembly.file_name)
        if context.file_system.file_exists(trial_path):
            return ProbeOutcome.resolved(trial_path)
        return ProbeOutcome.not_found()


class DescriptorLoadStrategy:
    """Ask the host assembly loader about anything that looks like a descriptor."""

    name = "descriptor-load"

    def probe(self, text: str, context: ProbeContext) -> ProbeOutcome:
        if "," not in text:
            return ProbeOutcome.not_found()

        try:
            location = context.assembly_loader.load(text)
        except Exception as e:
            logger.debug(f"Assembly load failed for {text!r}: {e}")
            return ProbeOutcome.not_found()

        if location and context.file_system.file_exists(location):
            return ProbeOutcome.resolved(location)
        return ProbeOutcome.not_found()


class SearchPathStrategy:
    """Join the reference's file name against each candidate directory in order."""

    name = "search-path"

    def probe(self, text: str, context: ProbeContext) -> ProbeOutcome:
        file_name = reference_file_name(text)

        for directory in context.search_paths:
            trial_path = os.path.join(directory, file_name)
            try:
                if context.file_system.file_exists(trial_path):
                    return ProbeOutcome.resolved(trial_path)
            except OSError as e:
                # One unreadable directory must not hide the rest
                emit_warning(context.config.log_warning, PROBE_FAILED, f"Could not probe {trial_path}: {e}")

        return ProbeOutcome.not_found()


class SharedCacheStrategy:
    """Look up name/version/token in the platform assembly cache (Windows only).

    Layout: <cache root>/<any>/<name>/v4.0_<version>__<token>/<name>.dll,
    where the cache root is two levels above the runtime directory.
    """

    name = "shared-cache"

    def probe(self, text: str, context: ProbeContext) -> ProbeOutcome:
        if is_file_name(text) or not context.windows_like:
            return ProbeOutcome.not_found()

        assembly = _parse_quietly(text)
        runtime_directory = context.platform.runtime_directory()
        if assembly is None or assembly.version is None or not runtime_directory:
            return ProbeOutcome.not_found()

        framework_root = os.path.dirname(os.path.dirname(runtime_directory.rstrip("\\/")))
        cache_root = os.path.join(framework_root, "assembly")
        if not context.file_system.directory_exists(cache_root):
            return ProbeOutcome.not_found()

        version_directory = f"{SHARED_CACHE_VERSION_PREFIX}{assembly.version}__{assembly.token_hex}"
        for cache_directory in context.file_system.list_directories(cache_root):
            assembly_directory = os.path.join(cache_directory, assembly.name)
            if not context.file_system.directory_exists(assembly_directory):
                continue
            trial_path = os.path.join(assembly_directory, version_directory, assembly.file_name)
            logger.debug(f"searching shared cache: {trial_path}")
            if context.file_system.file_exists(trial_path):
                return ProbeOutcome.resolved(trial_path)

        return ProbeOutcome.not_found()


def default_strategies() -> list[ResolutionStrategy]:
    return [
        AbsolutePathStrategy(),
        VersionedCoreLibraryStrategy(),
        DescriptorLoadStrategy(),
        SearchPathStrategy(),
        SharedCacheStrategy(),
    ]


class StrategyChain:
    """Runs strategies for one reference until the first one resolves.

    With a probe budget configured, strategies that have not started when
    the budget runs out are skipped (reported as SR003).
    """

    def __init__(
        self,
        strategies: Sequence[ResolutionStrategy] | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.strategies = list(strategies) if strategies is not None else default_strategies()
        self._clock = clock

    def run(self, request: ReferenceRequest, context: ProbeContext) -> ResolvedReference | None:
        """
        Resolve a single request.

        Args:
            request: Reference to resolve
            context: Shared per-call inputs

        Returns:
            ResolvedReference carrying the request's baggage, or None
        """
        logger.debug(f"resolving {request.text}")
        budget = context.config.probe_budget
        started = self._clock()

        for index, strategy in enumerate(self.strategies):
            if budget is not None and index > 0 and self._clock() - started > budget:
                emit_warning(
                    context.config.log_warning,
                    PROBE_BUDGET_EXCEEDED,
                    f"Probe budget of {budget}s exceeded for {request.text!r}; "
                    f"skipped '{strategy.name}' and later strategies",
                )
                break

            outcome = self._probe(strategy, request.text, context)
            if outcome.found:
                emit_message(context.config.log_message, f"resolved {request.text} --> {outcome.path}")
                return ResolvedReference(
                    path=outcome.path,
                    baggage=request.baggage,
                    resolved_by=strategy.name,
                )
            if outcome.status is ProbeStatus.FAILED:
                emit_warning(context.config.log_warning, outcome.code, outcome.message)

        logger.debug(f"unresolved {request.text}")
        return None

    def _probe(self, strategy: ResolutionStrategy, text: str, context: ProbeContext) -> ProbeOutcome:
        try:
            return strategy.probe(text, context)
        except ProbeError as e:
            return ProbeOutcome.failed(e.code, str(e))
        except Exception as e:
            return ProbeOutcome.failed(PROBE_FAILED, f"Strategy '{strategy.name}' failed for {text!r}: {e}")
