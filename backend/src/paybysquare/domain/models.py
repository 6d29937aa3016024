"""
Domain models for PayBySquare payment instructions.

These models describe a bank transfer, standing order or direct-debit
mandate before it is handed to an encoder. They are plain storage:
nothing here rejects a value. All constraint checking lives in
``paybysquare.domain.validation`` so that half-filled requests (e.g. from
a form that is still being edited) can exist without raising.

Design Decisions:
- Mutable dataclasses; assignment is pure replacement with no coupling
- Decimal for all monetary values to avoid floating-point errors
- Dates kept as ``YYYY-MM-DD`` strings so malformed input survives to validation
- Token fields (periodicity, direct debit type/scheme) are normalized once
  at construction and stored in canonical form only
"""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Self


class PaymentOption(str, Enum):
    """Payment type tags, in the order the encoder gives them priority."""
    PAYMENT_ORDER = "paymentorder"
    STANDING_ORDER = "standingorder"
    DIRECT_DEBIT = "directdebit"

    @property
    def bit(self) -> int:
        """Flag value used by the encoder when combining options."""
        return {"paymentorder": 1, "standingorder": 2, "directdebit": 4}[self.value]


class Periodicity(str, Enum):
    """Recurrence of a standing order, stored as single-letter codes."""
    DAILY = "d"
    WEEKLY = "w"
    BIWEEKLY = "b"
    MONTHLY = "m"
    BIMONTHLY = "B"
    QUARTERLY = "q"
    SEMIANNUAL = "s"
    ANNUAL = "a"

    @classmethod
    def parse(cls, token: str | None) -> "Periodicity | None":
        """
        Resolve a word (``monthly``) or letter code (``m``) to a member.

        Letter codes are case-sensitive because ``b`` and ``B`` differ.
        Returns None for anything unrecognized.
        """
        if not isinstance(token, str) or not token:
            return None
        token = token.strip()
        try:
            return cls(token)
        except ValueError:
            pass
        return cls.__members__.get(token.upper())


class DirectDebitScheme(str, Enum):
    SEPA = "sepa"
    OTHER = "other"

    @classmethod
    def parse(cls, token: str | None) -> "DirectDebitScheme | None":
        if not isinstance(token, str) or not token:
            return None
        try:
            return cls(token.strip().lower())
        except ValueError:
            return None


# Only spelling variants listed here are accepted; no other punctuation is stripped.
DIRECT_DEBIT_TYPE_ALIASES = {"one-off": "oneoff"}


class DirectDebitType(str, Enum):
    """Direct debit type; ``one-off`` is accepted as a spelling of ``oneoff``."""
    ONE_OFF = "oneoff"
    RECURRENT = "recurrent"

    @classmethod
    def parse(cls, token: str | None) -> "DirectDebitType | None":
        if not isinstance(token, str) or not token:
            return None
        cleaned = token.strip().lower()
        cleaned = DIRECT_DEBIT_TYPE_ALIASES.get(cleaned, cleaned)
        try:
            return cls(cleaned)
        except ValueError:
            return None


class ViolationKind(str, Enum):
    """Category of a constraint violation."""
    FORMAT = "format"
    RANGE = "range"
    LENGTH = "length"
    STRUCTURAL = "structural"
    ENUM = "enum"


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


def _canonical(parser: Any, token: str | None) -> str | None:
    """Return the canonical value for a token, or the token unchanged."""
    member = parser(token)
    return member.value if member is not None else token


def coerce_decimal(value: Any) -> Any:
    """
    Turn a numeric input into a Decimal without raising.

    Floats go through ``str`` so 0.1 stays 0.1. Strings that are not
    numbers are returned as-is and left for the validator to report.
    """
    if value is None or isinstance(value, Decimal) or isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return Decimal(str(value))
    if isinstance(value, str):
        if not value.strip():
            return None
        try:
            return Decimal(value.strip())
        except InvalidOperation:
            return value
    return value


@dataclass
class BankAccount:
    """One receiving account. ``iban`` is required, ``swift`` is optional."""
    iban: str | None = None
    swift: str | None = None


@dataclass
class StandingOrder:
    """
    Recurrence rule for a permanent transfer.

    ``month`` lists the months (1-12) in which the order runs; ``last_date``
    is the date after which no further executions happen.
    """
    day: int | None = None
    month: list[int] | None = None
    periodicity: str | None = None
    last_date: str | None = None

    def __post_init__(self) -> None:
        self.periodicity = _canonical(Periodicity.parse, self.periodicity)


@dataclass
class DirectDebit:
    """
    Mandate description for a SEPA or domestic (inkaso) direct debit.

    ``max_amount`` caps what the creditor may collect per debit and
    ``valid_till_date`` is the mandate expiry.
    """
    scheme: str | None = DirectDebitScheme.OTHER.value
    type: str | None = None
    variable_symbol: str | None = None
    specific_symbol: str | None = None
    originators_reference_information: str | None = None
    mandate_id: str | None = None
    creditor_id: str | None = None
    contract_id: str | None = None
    max_amount: Decimal | None = None
    valid_till_date: str | None = None

    def __post_init__(self) -> None:
        self.scheme = _canonical(DirectDebitScheme.parse, self.scheme)
        self.type = _canonical(DirectDebitType.parse, self.type)
        self.max_amount = coerce_decimal(self.max_amount)


@dataclass
class PaymentRequest:
    """
    Aggregate root for a single PayBySquare payment.

    Either ``iban`` or ``bank_accounts`` identifies where the money goes.
    When both are present the bank account list is what gets encoded.
    ``with_frame`` and ``qr_size`` are rendering options passed through to
    the encoder untouched.
    """
    amount: Decimal | None = None
    currency: str | None = "EUR"
    iban: str | None = None
    swift: str | None = None
    invoice_id: str | None = None
    date: str | None = None
    payment_due_date: str | None = None
    variable_symbol: str | None = None
    constant_symbol: str | None = None
    specific_symbol: str | None = None
    originators_reference_information: str | None = None
    note: str | None = None
    beneficiary_name: str | None = None
    beneficiary_address1: str | None = None
    beneficiary_address2: str | None = None
    payment_options: list[str] = field(default_factory=list)
    bank_accounts: list[BankAccount] = field(default_factory=list)
    standing_order: StandingOrder | None = None
    direct_debit: DirectDebit | None = None
    with_frame: bool = True
    qr_size: int | None = 300

    @classmethod
    def create(
        cls,
        amount: Decimal | int | float | str | None,
        iban: str | None,
        beneficiary_name: str | None,
    ) -> Self:
        """Build a single-account payment order from its three essentials."""
        return cls(
            amount=coerce_decimal(amount),
            iban=iban,
            beneficiary_name=beneficiary_name,
        )

    @property
    def primary_account(self) -> str | None:
        """IBAN that the encoder will put first."""
        accounts = self.bank_accounts
        if isinstance(accounts, (list, tuple)) and accounts and isinstance(accounts[0], BankAccount):
            return accounts[0].iban
        return self.iban

    def __str__(self) -> str:
        return (
            f"PaymentRequest(amount={self.amount} {self.currency}, "
            f"account={self.primary_account}, "
            f"beneficiary={self.beneficiary_name!r}, "
            f"vs={self.variable_symbol})"
        )


@dataclass(frozen=True)
class Violation:
    """
    A single broken constraint found during validation.

    ``field_path`` uses the external camelCase names, e.g.
    ``bankAccounts[2].iban`` or ``directDebit.mandateId``.
    """
    field_path: str
    rule: str
    kind: ViolationKind
    message: str
    severity: Severity = Severity.ERROR

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR
