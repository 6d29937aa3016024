"""
PayBySquare payment request model and validator.

Build a request, validate it, and hand it to an encoder only when
``validate()`` returns no errors.
"""

from paybysquare.domain.builder import PaymentRequestBuilder
from paybysquare.domain.models import (
    BankAccount,
    DirectDebit,
    PaymentRequest,
    StandingOrder,
    Violation,
    ViolationKind,
)
from paybysquare.domain.validation import Validator, validate

__version__ = "1.1.0"

__all__ = [
    "BankAccount",
    "DirectDebit",
    "PaymentRequest",
    "PaymentRequestBuilder",
    "StandingOrder",
    "Validator",
    "Violation",
    "ViolationKind",
    "validate",
]
