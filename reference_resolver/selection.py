"""
Default resolver selection.

An externally provided resolver (for instance one shipped alongside a build
tool) is preferred when enabled and available; the built-in
SimulatedResolver is the terminal fallback, so selection never fails.

External resolvers are registered as entry points:

    [project.entry-points."reference_resolver.providers"]
    "12" = "my_package.resolver:create_resolver"

The entry-point name is the version key; the target is a zero-argument
factory returning an object that satisfies the Resolver protocol.
"""

import importlib.metadata
import logging
from collections.abc import Callable
from collections.abc import Sequence
from typing import Any

from .exceptions import ResolverUnavailableError
from .interfaces import Resolver
from .interfaces import ResolverProvider
from .resolver import SimulatedResolver

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "reference_resolver.providers"
FALLBACK_RESOLVER_VERSION = "12"


class EntryPointResolverProvider:
    """ResolverProvider that loads a factory from an installed entry point."""

    def __init__(self, entry_point: importlib.metadata.EntryPoint):
        self._entry_point = entry_point

    @property
    def version(self) -> str:
        return self._entry_point.name

    @property
    def source(self) -> str:
        return self._entry_point.value

    def try_create(self) -> Resolver | None:
        try:
            factory = self._entry_point.load()
            return _checked(factory(), source=self._entry_point.value)
        except Exception as e:
            logger.debug(f"Resolver provider '{self._entry_point.value}' unavailable: {e}")
            return None


class FactoryResolverProvider:
    """ResolverProvider wrapping an in-process factory."""

    def __init__(self, version: str, factory: Callable[[], Any]):
        self._version = version
        self._factory = factory

    @property
    def version(self) -> str:
        return self._version

    @property
    def source(self) -> str:
        return getattr(self._factory, "__qualname__", repr(self._factory))

    def try_create(self) -> Resolver | None:
        try:
            return _checked(self._factory(), source=f"factory for version {self._version}")
        except Exception as e:
            logger.debug(f"Resolver provider for version {self._version} unavailable: {e}")
            return None


def _checked(candidate: Any, source: str) -> Resolver:
    if candidate is None:
        raise ResolverUnavailableError(f"{source} returned no resolver")
    if not isinstance(candidate, Resolver):
        raise ResolverUnavailableError(
            f"{source} returned {type(candidate).__name__}, which does not implement Resolver"
        )
    return candidate


def discover_resolver_providers() -> list[ResolverProvider]:
    """Discover externally provided resolvers via entry points."""
    try:
        entry_points = importlib.metadata.entry_points(group=ENTRY_POINT_GROUP)
    except Exception as e:
        logger.debug(f"Could not discover resolver providers: {e}")
        return []

    providers: list[ResolverProvider] = [EntryPointResolverProvider(ep) for ep in entry_points]
    logger.debug(f"Discovered {len(providers)} resolver provider(s)")
    return providers


def _try_version(providers: Sequence[ResolverProvider], version: str) -> Resolver | None:
    """First provider for ``version`` that creates a resolver, in priority order."""
    for provider in providers:
        try:
            if provider.version != version:
                continue
            resolver = provider.try_create()
        except Exception as e:
            logger.debug(f"Resolver provider for version {version} failed: {e}")
            continue
        if resolver is not None and isinstance(resolver, Resolver):
            logger.info(f"Using external reference resolver version {version}")
            return resolver
    return None


def get_default_resolver(
    external_resolver_enabled: bool = False,
    preferred_version: str | None = None,
    providers: Sequence[ResolverProvider] | None = None,
) -> Resolver:
    """
    Select the resolver to use.

    Order:
    1. External resolver for ``preferred_version`` (if enabled)
    2. External resolver for the fallback version "12" (if enabled and a
       different version was preferred)
    3. Built-in SimulatedResolver

    Args:
        external_resolver_enabled: Whether external resolvers may be used
        preferred_version: Preferred version key (default "12")
        providers: Candidate providers in priority order (default: entry points)

    Returns:
        A Resolver; never fails
    """
    version = preferred_version or FALLBACK_RESOLVER_VERSION

    if external_resolver_enabled:
        candidates = discover_resolver_providers() if providers is None else list(providers)

        resolver = _try_version(candidates, version)
        if resolver is not None:
            return resolver

        if version != FALLBACK_RESOLVER_VERSION:
            resolver = _try_version(candidates, FALLBACK_RESOLVER_VERSION)
            if resolver is not None:
                return resolver

    logger.debug("Using built-in reference resolver")
    return SimulatedResolver()
