"""
Output of validation results: error reports and the terminal JSON emission.
"""

from .json_emitter import CONTENT_TYPE_HEADER, emit_and_halt, write_error_payload
from .report import NO_ERRORS_MESSAGE, render_errors

__all__ = [
    "CONTENT_TYPE_HEADER",
    "NO_ERRORS_MESSAGE",
    "emit_and_halt",
    "render_errors",
    "write_error_payload",
]
