"""
Reference Resolver - locate library files for symbolic references.
"""

__version__ = "1.0.0"

from .exceptions import AssemblyLoadError
from .exceptions import ConfigurationError
from .exceptions import DescriptorParseError
from .exceptions import ProbeError
from .exceptions import ResolutionError
from .exceptions import ResolverUnavailableError
from .interfaces import AssemblyLoader
from .interfaces import FileSystem
from .interfaces import PlatformCapabilities
from .interfaces import Resolver
from .interfaces import ResolverProvider
from .models import ProbeOutcome
from .models import ProbeStatus
from .models import ReferenceRequest
from .models import ResolutionConfig
from .models import ResolutionEnvironment
from .models import ResolvedReference
from .names import AssemblyName
from .names import parse_assembly_name
from .platform import HostPlatform
from .platform import LocalFileSystem
from .platform import NullAssemblyLoader
from .platform import NullPlatform
from .resolver import SimulatedResolver
from .search_paths import build_search_paths
from .selection import get_default_resolver
from .strategies import StrategyChain

__all__ = [
    "SimulatedResolver",
    "get_default_resolver",
    "build_search_paths",
    "StrategyChain",
    # Models
    "ReferenceRequest",
    "ResolvedReference",
    "ResolutionConfig",
    "ResolutionEnvironment",
    "ProbeOutcome",
    "ProbeStatus",
    "AssemblyName",
    "parse_assembly_name",
    # Interfaces
    "Resolver",
    "ResolverProvider",
    "PlatformCapabilities",
    "FileSystem",
    "AssemblyLoader",
    # Host implementations
    "HostPlatform",
    "NullPlatform",
    "LocalFileSystem",
    "NullAssemblyLoader",
    # Error taxonomy
    "ResolutionError",
    "DescriptorParseError",
    "AssemblyLoadError",
    "ProbeError",
    "ResolverUnavailableError",
    "ConfigurationError",
]
