"""
Domain Exceptions

Two error kinds reach the caller:
    - ValidationError: a required field is missing or malformed (HTTP 400)
    - NotFoundError: a referenced id does not exist (HTTP 404)

Update and delete of a missing id do not raise; they are logged no-ops.
"""

from typing import Optional


class ComandaError(Exception):
    """Base class for all domain errors."""
    status_code = 500

    def __init__(self, message: str = "Erro interno."):
        self.message = message
        super().__init__(self.message)


class ValidationError(ComandaError):
    """Raised when required data is missing or invalid."""
    status_code = 400

    def __init__(self, message: str = "Dados inválidos.", field: Optional[str] = None):
        self.field = field
        super().__init__(message)


class NotFoundError(ComandaError):
    """Raised when a menu item or order id does not exist."""
    status_code = 404

    def __init__(self, kind: str, item_id: str):
        self.kind = kind
        self.item_id = item_id
        super().__init__(f"{kind} {item_id} not found")
