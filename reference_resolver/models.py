"""
Core data models for reference resolution.
Uses Pydantic for validation; probe outcomes are plain dataclasses.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

logger = logging.getLogger(__name__)

Describer = Callable[[str, str], str]
MessageSink = Callable[[str], None]
CodedSink = Callable[[str, str], None]


class ResolutionEnvironment(str, Enum):
    """Context a reference set is resolved for.

    Only affects which default directories the caller supplies; the
    resolution algorithm itself is identical for all three.
    """

    # A script or source being compiled
    COMPILE_TIME_LIKE = "compile-time"
    # A script or source being interpreted
    RUNTIME_LIKE = "runtime"
    # A script or source being edited
    DESIGN_TIME_LIKE = "design-time"


def _detail_only(header: str, detail: str) -> str:
    return detail


def _forward_message(text: str) -> None:
    logger.info(text)


def _forward_warning(code: str, text: str) -> None:
    logger.warning(f"[{code}] {text}")


def _forward_error(code: str, text: str) -> None:
    logger.error(f"[{code}] {text}")


class ReferenceRequest(BaseModel):
    """A single textual reference plus caller-owned baggage."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(..., description="Path, file name or strong-name descriptor")
    baggage: str = Field(default="", description="Round-tripped verbatim, never interpreted")

    @classmethod
    def of(cls, text: str, baggage: str = "") -> "ReferenceRequest":
        return cls(text=text, baggage=baggage)


class ResolvedReference(BaseModel):
    """A reference that was located on disk."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(..., description="Location of the resolved file")
    baggage: str = Field(default="", description="Baggage of the originating request")
    describe: Describer = Field(
        default=_detail_only,
        description="Deferred tooltip text producer: (header, detail) -> text",
    )
    resolved_by: str = Field(default="", description="Name of the strategy that succeeded")

    def __str__(self) -> str:
        return f"ResolvedFile({self.path})"


class ResolutionConfig(BaseModel):
    """
    Immutable per-call configuration for ``Resolver.resolve``.

    Directory fields hold plain strings so Windows-style paths round-trip
    unchanged on any host. An empty string means "not configured".

    The three sinks receive caller-facing diagnostics. They never alter
    control flow; their defaults forward to the package logger.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    environment: ResolutionEnvironment = Field(default=ResolutionEnvironment.COMPILE_TIME_LIKE)
    target_framework_version: str = Field(default="v4.5", description='Opaque moniker, e.g. "v4.5.1"')
    target_framework_directories: tuple[str, ...] = Field(default=())
    target_processor_architecture: str = Field(default="", description="Advisory only")
    output_directory: str = Field(default="")
    core_library_directory: str = Field(default="")
    explicit_include_directories: tuple[str, ...] = Field(default=())
    implicit_include_directory: str = Field(default="")
    core_library_name: str = Field(
        default="FSharp.Core",
        description="Library family handled by the versioned core library probe",
    )
    probe_budget: float | None = Field(
        default=None,
        gt=0,
        description="Seconds a single reference may spend before remaining strategies are skipped",
    )
    log_message: MessageSink = Field(default=_forward_message)
    log_warning: CodedSink = Field(default=_forward_warning)
    log_error: CodedSink = Field(default=_forward_error)


class ProbeStatus(str, Enum):
    RESOLVED = "resolved"
    NOT_FOUND = "not_found"
    FAILED = "failed"


@dataclass(frozen=True)
class ProbeOutcome:
    """Result of running one strategy against one reference."""

    status: ProbeStatus
    path: str | None = None
    code: str | None = None
    message: str | None = None

    @classmethod
    def resolved(cls, path: str) -> "ProbeOutcome":
        return cls(status=ProbeStatus.RESOLVED, path=path)

    @classmethod
    def not_found(cls) -> "ProbeOutcome":
        return cls(status=ProbeStatus.NOT_FOUND)

    @classmethod
    def failed(cls, code: str, message: str) -> "ProbeOutcome":
        return cls(status=ProbeStatus.FAILED, code=code, message=message)

    @property
    def found(self) -> bool:
        return self.status is ProbeStatus.RESOLVED
