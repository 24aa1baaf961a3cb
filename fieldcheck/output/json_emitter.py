"""
Terminal JSON emission of the first validation error.

The rule engine only records a halt signal. Entry points call
emit_and_halt() to write the payload and stop the process.
"""

import sys
from typing import TextIO

from fieldcheck.core.models import ErrorPayload
from fieldcheck.core.rules import RuleEngine
from fieldcheck.observability.logger import get_logger

logger = get_logger(__name__)

CONTENT_TYPE_HEADER = "Content-Type: application/json"


def write_error_payload(
    payload: ErrorPayload,
    stream: TextIO | None = None,
    include_header: bool = True,
) -> None:
    """
    Write an error payload as JSON, preceded by the content-type marker.

    Args:
        payload: Payload to write
        stream: Output stream (defaults to stdout)
        include_header: Write the content-type line and a blank line first
    """
    stream = stream or sys.stdout
    if include_header:
        stream.write(f"{CONTENT_TYPE_HEADER}\n\n")
    stream.write(payload.to_json())
    stream.flush()


def emit_and_halt(
    engine: RuleEngine,
    stream: TextIO | None = None,
    include_header: bool = True,
) -> None:
    """
    Emit the engine's halt signal and terminate, if there is one.

    Returns normally when the engine holds no halt signal.

    Raises:
        SystemExit: With status 0 after the payload has been written
    """
    payload = engine.halt_signal
    if payload is None:
        return

    logger.info(
        "Emitting validation error and halting",
        extra={"control": payload.control},
    )
    write_error_payload(payload, stream=stream, include_header=include_header)
    raise SystemExit(0)
