"""Centralized error message definitions for invalid tree shapes.

Selector tokens never produce errors; only values that look like an element
but cannot be one (a list without a usable tag) are reported, using the codes
below.
"""

from __future__ import annotations


def generate_error_message(code: str, detail: str | None = None) -> str:
    """Generate human-readable error message from error code.

    Args:
        code: The error code string (kebab-case format)
        detail: Optional repr of the offending value to include in the message

    Returns:
        Human-readable error message string
    """
    messages = {
        # Tag slot errors
        "missing-tag": f"Element has an attribute mapping where its tag should be: {detail}",
        "invalid-tag": f"Element tag must be a string or a component function, got {detail}",
    }

    # Return message or fall back to the code itself if not found
    return messages.get(code, code)
