"""
Shared helpers for value coercion.
"""

from .coercion import is_numeric, to_number, to_text, to_trimmed_text

__all__ = [
    "is_numeric",
    "to_number",
    "to_text",
    "to_trimmed_text",
]
