"""
Rendering of accumulated validation errors for humans and scripts.
"""

import json

NO_ERRORS_MESSAGE = "No validation errors."


def render_errors(errors: dict, output_format: str = "text") -> str:
    """
    Render an alias -> message mapping.

    Args:
        errors: Errors as returned by RuleEngine.get_errors()
        output_format: "text" for one "alias: message" line per error,
                       "json" for a JSON object

    Returns:
        The rendered report
    """
    if output_format == "json":
        return json.dumps({str(alias): message for alias, message in errors.items()}, ensure_ascii=False)

    if not errors:
        return NO_ERRORS_MESSAGE

    return "\n".join(f"{alias}: {message}" for alias, message in errors.items())
