"""Auth Messages — maps identity provider failures to login form messages.

Invariants:
    - CREDENTIALS_SIGNIN -> "Invalid credentials."
    - Every other failure type -> "Something went wrong."
"""

from invoicer.core.domain_types import AuthFailureType

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials."
GENERIC_AUTH_MESSAGE = "Something went wrong."


def auth_failure_message(failure_type: AuthFailureType) -> str:
    if failure_type == AuthFailureType.CREDENTIALS_SIGNIN:
        return INVALID_CREDENTIALS_MESSAGE
    return GENERIC_AUTH_MESSAGE
