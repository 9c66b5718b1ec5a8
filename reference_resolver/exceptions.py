"""Exception hierarchy for reference-resolver.

Resolution itself is best-effort: strategies convert these into probe
outcomes and nothing escapes ``Resolver.resolve``. They surface to callers
only from the public helpers (descriptor parsing, config loading).
"""


class ResolutionError(Exception):
    """Base exception for all resolution-related errors."""


class DescriptorParseError(ResolutionError):
    """Reference text is not a well-formed strong-name descriptor."""


class AssemblyLoadError(ResolutionError):
    """The host assembly loader could not load the descriptor."""


class ProbeError(ResolutionError):
    """A strategy hit a file-system or registry error while probing.

    Attributes:
        code: Stable diagnostic code reported through the warning sink.
    """

    def __init__(self, message: str, *, code: str) -> None:
        super().__init__(message)
        self.code = code


class ResolverUnavailableError(ResolutionError):
    """An externally provided resolver could not be located or created."""


class ConfigurationError(ResolutionError):
    """Configuration file is missing, malformed or fails validation."""
