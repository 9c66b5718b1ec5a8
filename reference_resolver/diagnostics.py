"""
Stable diagnostic codes reported through the warning sink.
"""

import logging

from .models import CodedSink
from .models import MessageSink

logger = logging.getLogger(__name__)

# A strategy failed with an I/O or registry error; the chain continued
PROBE_FAILED = "SR001"

# Platform assembly-folder discovery failed; contributed no directories
DISCOVERY_FAILED = "SR002"

# Per-reference probe budget ran out; remaining strategies were skipped
PROBE_BUDGET_EXCEEDED = "SR003"

ALL_CODES = [
    PROBE_FAILED,
    DISCOVERY_FAILED,
    PROBE_BUDGET_EXCEEDED,
]


def emit_warning(sink: CodedSink, code: str, text: str) -> None:
    """Report through a caller-supplied warning sink; a failing sink is only logged."""
    try:
        sink(code, text)
    except Exception as e:
        logger.error(f"Warning sink raised while reporting [{code}] {text}: {e}")


def emit_message(sink: MessageSink, text: str) -> None:
    """Report through a caller-supplied message sink; a failing sink is only logged."""
    try:
        sink(text)
    except Exception as e:
        logger.error(f"Message sink raised while reporting {text!r}: {e}")
