"""
Error types and structured warning codes for placement.
Only ConfigurationError is raised; everything else is a warning key on the result.
"""

from __future__ import annotations


class ConfigurationError(LookupError):
    """Unrecognised layout name."""


class DegenerateInputWarning(UserWarning):
    """Input yields a valid but possibly empty or overlapping coordinate list."""


# Known warning keys (stored in PlacementResult.warnings)
EMPTY_TOTAL = "empty_total"
TOKEN_EXCEEDS_CONTAINER = "token_exceeds_container"
ZERO_CIRCUMFERENCE = "zero_circumference"
TOO_MANY_TOKENS = "too_many_tokens"

# User-facing messages (short, actionable)
USER_MESSAGES: dict[str, str] = {
    EMPTY_TOTAL: "No tokens to place.",
    TOKEN_EXCEEDS_CONTAINER: "Token is as large as the container. Tokens will overlap; measure the container first.",
    ZERO_CIRCUMFERENCE: "Reference curve has no length. All tokens share one position.",
    TOO_MANY_TOKENS: "More tokens than sweep steps. Some tokens were not placed.",
}


def user_message(warning_key: str | None, fallback: str = "Something went wrong.") -> str:
    """Return a user-facing message for the given warning key."""
    if not warning_key:
        return fallback
    return USER_MESSAGES.get(warning_key, fallback)
