"""Typed errors raised by the payment core.

Each class maps to one HTTP status in ``backend.app.main``. Validation,
not-found and conflict errors surface their reasons to the caller; a
``ServerFaultError`` signals an internal inconsistency and is rendered with a
generic message.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional


class ViolationKind(str, Enum):
    INVALID = "invalid"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"


@dataclass(frozen=True)
class Violation:
    field: str
    message: str
    kind: ViolationKind = ViolationKind.INVALID

    def as_dict(self) -> dict:
        return {"field": self.field, "message": self.message, "kind": self.kind.value}


class PaymentError(Exception):
    status_code = 500
    code = "payment_error"

    def __init__(self, message: str, violations: Optional[Iterable[Violation]] = None):
        super().__init__(message)
        self.message = message
        self.violations: List[Violation] = list(violations or [])


class PaymentValidationError(PaymentError):
    status_code = 400
    code = "validation_error"


class NotFoundError(PaymentError):
    status_code = 404
    code = "not_found"


class ConflictError(PaymentError):
    status_code = 409
    code = "conflict"


class ServerFaultError(PaymentError):
    status_code = 500
    code = "server_fault"
