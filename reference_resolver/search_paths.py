"""Candidate directory list construction."""

from __future__ import annotations

import logging

from .diagnostics import DISCOVERY_FAILED
from .diagnostics import emit_warning
from .interfaces import PlatformCapabilities
from .models import ResolutionConfig

logger = logging.getLogger(__name__)


def build_search_paths(
    config: ResolutionConfig,
    platform: PlatformCapabilities | None = None,
) -> list[str]:
    """Build the ordered candidate directory list for one resolve call.

    Order (earlier entries win):
    1. Target framework directories
    2. Explicit include directories
    3. Core library directory
    4. Implicit include directory
    5. Platform-registered assembly folders (Windows-like hosts only)

    Empty entries mean "not configured" and are skipped. Discovery failures
    are reported through the warning sink and contribute no directories.

    Args:
        config: Resolution configuration.
        platform: Platform capabilities, or None when discovery is unavailable.

    Returns:
        Ordered list of directories.
    """
    search_paths = [
        *config.target_framework_directories,
        *config.explicit_include_directories,
        config.core_library_directory,
        config.implicit_include_directory,
    ]
    search_paths = [path for path in search_paths if path]

    if platform is not None:
        search_paths.extend(_discover_assembly_folders(config, platform))

    logger.debug(f"Candidate directories: {search_paths}")
    return search_paths


def _discover_assembly_folders(config: ResolutionConfig, platform: PlatformCapabilities) -> list[str]:
    try:
        if not platform.is_windows_like():
            return []
        folders = platform.enumerate_assembly_folders()
    except Exception as e:
        emit_warning(config.log_warning, DISCOVERY_FAILED, f"Assembly folder discovery failed: {e}")
        return []
    return [folder for folder in folders if folder]
