"""Strong-name descriptor parsing."""

from __future__ import annotations

import re
from dataclasses import dataclass
from dataclasses import field

from .exceptions import DescriptorParseError

_VERSION_PATTERN = re.compile(r"^\d+(?:\.\d+){1,3}$")
_TOKEN_PATTERN = re.compile(r"^[0-9a-fA-F]{16}$")


@dataclass
class AssemblyName:
    """Parsed strong-name descriptor components."""

    name: str  # Simple name, e.g. FSharp.Core
    version: str | None = None  # 4.4.0.0 (None if not specified)
    culture: str | None = None  # neutral, en-US, ...
    public_key_token: str | None = None  # lower-case hex, "" for PublicKeyToken=null
    extra: dict[str, str] = field(default_factory=dict)  # Unrecognized key=value pairs

    @property
    def token_hex(self) -> str:
        """Public key token as it appears in shared-cache directory names."""
        return self.public_key_token or ""

    @property
    def file_name(self) -> str:
        """Conventional library file name for this assembly."""
        return f"{self.name}.dll"

    @staticmethod
    def simple_name(text: str) -> str:
        """Best-effort simple name: the parsed name, or the raw text if unparseable."""
        try:
            return parse_assembly_name(text).name
        except DescriptorParseError:
            return text

    def __str__(self) -> str:
        parts = [self.name]
        if self.version is not None:
            parts.append(f"Version={self.version}")
        if self.culture is not None:
            parts.append(f"Culture={self.culture}")
        if self.public_key_token is not None:
            parts.append(f"PublicKeyToken={self.public_key_token or 'null'}")
        return ", ".join(parts)


def parse_assembly_name(text: str) -> AssemblyName:
    """Parse a strong-name descriptor.

    Examples:
        'System' -> name='System'
        'FSharp.Core, Version=4.4.0.0, Culture=neutral, PublicKeyToken=b03f5f7f11d50a3a'
            -> name='FSharp.Core', version='4.4.0.0', culture='neutral',
               public_key_token='b03f5f7f11d50a3a'

    Args:
        text: Descriptor text.

    Returns:
        AssemblyName with parsed components.

    Raises:
        DescriptorParseError: If the text is not a well-formed descriptor.
    """
    components = [part.strip() for part in text.split(",")]
    name = components[0]
    if not name or "=" in name:
        raise DescriptorParseError(f"Missing assembly name in descriptor: {text!r}")

    result = AssemblyName(name=name)
    seen: set[str] = set()

    for component in components[1:]:
        key, sep, value = component.partition("=")
        key = key.strip()
        value = value.strip()
        if not sep or not key:
            raise DescriptorParseError(f"Malformed component {component!r} in descriptor: {text!r}")

        lowered = key.lower()
        if lowered in seen:
            raise DescriptorParseError(f"Duplicate {key} in descriptor: {text!r}")
        seen.add(lowered)

        if lowered == "version":
            result.version = _parse_version(value, text)
        elif lowered == "culture":
            if not value:
                raise DescriptorParseError(f"Empty Culture in descriptor: {text!r}")
            result.culture = value
        elif lowered == "publickeytoken":
            result.public_key_token = _parse_token(value, text)
        else:
            result.extra[key] = value

    return result


def _parse_version(value: str, text: str) -> str:
    if not _VERSION_PATTERN.match(value):
        raise DescriptorParseError(f"Invalid Version {value!r} in descriptor: {text!r}")
    # Numeric parts print without leading zeros, the way the runtime formats them
    return ".".join(str(int(part)) for part in value.split("."))


def _parse_token(value: str, text: str) -> str:
    if value.lower() == "null":
        return ""
    if not _TOKEN_PATTERN.match(value):
        raise DescriptorParseError(f"Invalid PublicKeyToken {value!r} in descriptor: {text!r}")
    return value.lower()
