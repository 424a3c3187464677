"""
Exceptions raised by the message model.

Everything here is a ``ValueError`` so callers that only care about bad
input can catch the built-in type.
"""

from __future__ import annotations


class ValidationError(ValueError):
    """A field was given a value the gateway would reject.

    Raised while a value object or request is being constructed, never
    later when it is serialised.
    """

    def __init__(self, field: str, value, message: str | None = None, accepted: list | None = None):
        self.field = field
        self.value = value
        self.accepted = accepted

        if message is None:
            message = f'Invalid {field} "{value}"'
            if accepted:
                message += f'; require one of {", ".join(accepted)}'

        super().__init__(message)
