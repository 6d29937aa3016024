"""
Validation rules for PayBySquare payment requests.

This module contains pure functions that check a PaymentRequest and its
nested objects against the PayBySquare field constraints and the
cross-field invariants. No side effects, no I/O, no normalization: the
request is only read.

Every applicable rule runs and every violation is collected, so a caller
can show all problems at once. Violations are returned in field
declaration order: top-level fields, then each bank account in list
order, then the standing order, then the direct debit.

Design Decisions:
- One small checker per constraint shape (pattern, length, digits, dates)
- Absent values skip format checks; absence is only an error where a
  rule requires presence
- Empty strings count as absent for every optional text field
- Bounds are inclusive, exactly as the PayBySquare standard states them
"""

import logging
import re
from collections import Counter
from decimal import Decimal
from typing import Any, Self

from .dates import parse_iso_date
from .models import (
    BankAccount,
    DirectDebit,
    DirectDebitScheme,
    DirectDebitType,
    PaymentOption,
    PaymentRequest,
    Periodicity,
    Severity,
    StandingOrder,
    Violation,
    ViolationKind,
)

logger = logging.getLogger(__name__)


IBAN_PATTERN = re.compile(r"^[A-Z]{2}[0-9]{2}[A-Z0-9]+$")
SWIFT_PATTERN = re.compile(r"^[A-Z]{6}[A-Z0-9]{2}([A-Z0-9]{3})?$")
CURRENCY_PATTERN = re.compile(r"^[A-Z]{3}$")
DIGITS_PATTERN = re.compile(r"^[0-9]+$")

IBAN_MAX_LENGTH = 34
SWIFT_MAX_LENGTH = 11

MIN_AMOUNT = Decimal("0.01")
MAX_BANK_ACCOUNTS = 6
QR_SIZE_MIN = 100
QR_SIZE_MAX = 1000
DAY_MIN, DAY_MAX = 1, 31
MONTH_MIN, MONTH_MAX = 1, 12
LIST_TYPES = (list, tuple, set)


def _is_unset(value: Any) -> bool:
    return value is None or value == ""


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _items(value: Any) -> list:
    """Entries of a list-valued field; a value of the wrong type has none."""
    if isinstance(value, LIST_TYPES):
        return list(value)
    return []


def check_list(path: str, value: Any, label: str) -> list[Violation]:
    """Reject a list-valued field holding a scalar or a mapping. Absent values pass."""
    if value is None or isinstance(value, LIST_TYPES):
        return []
    return [Violation(path, "type", ViolationKind.FORMAT, f"{label} must be a list")]


def check_max_length(path: str, value: Any, max_length: int, label: str) -> list[Violation]:
    """Reject text longer than ``max_length``. Absent values pass."""
    if _is_unset(value):
        return []
    if not isinstance(value, str):
        return [Violation(path, "type", ViolationKind.FORMAT, f"{label} must be text")]
    if len(value) > max_length:
        return [
            Violation(
                path,
                "max_length",
                ViolationKind.LENGTH,
                f"{label} must not exceed {max_length} characters",
            )
        ]
    return []


def check_pattern(
    path: str,
    value: Any,
    pattern: re.Pattern[str],
    max_length: int,
    label: str,
    message: str,
) -> list[Violation]:
    """
    Check an optional text field against a length bound and a regex.

    Both rules are evaluated, so a value that is too long and malformed
    yields two violations.
    """
    violations = check_max_length(path, value, max_length, label)
    if _is_unset(value) or not isinstance(value, str):
        return violations
    if not pattern.fullmatch(value):
        violations.append(Violation(path, "pattern", ViolationKind.FORMAT, message))
    return violations


def check_iban(path: str, value: Any) -> list[Violation]:
    return check_pattern(path, value, IBAN_PATTERN, IBAN_MAX_LENGTH, "IBAN", "Invalid IBAN format")


def check_swift(path: str, value: Any) -> list[Violation]:
    return check_pattern(
        path, value, SWIFT_PATTERN, SWIFT_MAX_LENGTH, "SWIFT", "Invalid SWIFT/BIC format"
    )


def check_digits(path: str, value: Any, max_length: int, label: str) -> list[Violation]:
    """Symbols (variable, constant, specific) are ASCII digits only."""
    return check_pattern(
        path,
        value,
        DIGITS_PATTERN,
        max_length,
        label,
        f"{label} must contain only digits",
    )


def check_date(path: str, value: Any, label: str) -> list[Violation]:
    if _is_unset(value):
        return []
    if not isinstance(value, str) or parse_iso_date(value) is None:
        return [
            Violation(
                path,
                "date",
                ViolationKind.FORMAT,
                f"{label} must be a valid date in YYYY-MM-DD format",
            )
        ]
    return []


def check_min_amount(path: str, value: Any, label: str) -> list[Violation]:
    """Check a present amount is a finite number of at least 0.01."""
    if _is_unset(value):
        return []
    if isinstance(value, bool) or not isinstance(value, (Decimal, int, float)):
        return [Violation(path, "number", ViolationKind.FORMAT, f"{label} must be a number")]
    amount = Decimal(str(value)) if isinstance(value, float) else Decimal(value)
    if not amount.is_finite():
        return [Violation(path, "number", ViolationKind.FORMAT, f"{label} must be a finite number")]
    if amount < MIN_AMOUNT:
        return [
            Violation(
                path,
                "min_value",
                ViolationKind.RANGE,
                f"{label} must be at least {MIN_AMOUNT}",
            )
        ]
    return []


def check_int_range(path: str, value: Any, low: int, high: int, label: str) -> list[Violation]:
    if value is None:
        return []
    if not _is_int(value):
        return [Violation(path, "integer", ViolationKind.FORMAT, f"{label} must be a whole number")]
    if not low <= value <= high:
        return [
            Violation(
                path,
                "range",
                ViolationKind.RANGE,
                f"{label} must be between {low} and {high}",
            )
        ]
    return []


def requires_amount(request: PaymentRequest) -> bool:
    """
    True when the request is an immediate transfer.

    That is the case when neither a standing order nor a direct debit is
    attached, or when ``paymentorder`` is among the payment options.
    """
    if request.standing_order is None and request.direct_debit is None:
        return True
    return PaymentOption.PAYMENT_ORDER.value in _items(request.payment_options)


def validate_amount(request: PaymentRequest) -> list[Violation]:
    if _is_unset(request.amount):
        if requires_amount(request):
            return [
                Violation(
                    "amount",
                    "required",
                    ViolationKind.STRUCTURAL,
                    "Amount is mandatory for an immediate payment",
                )
            ]
        return []
    return check_min_amount("amount", request.amount, "Amount")


def validate_currency(request: PaymentRequest) -> list[Violation]:
    currency = request.currency
    if not isinstance(currency, str) or not CURRENCY_PATTERN.fullmatch(currency):
        return [
            Violation(
                "currency",
                "pattern",
                ViolationKind.FORMAT,
                "Currency must be a valid ISO 4217 code",
            )
        ]
    return []


def validate_account_presence(request: PaymentRequest) -> list[Violation]:
    """Rule: either ``iban`` is set or ``bankAccounts`` is non-empty."""
    if _is_unset(request.iban) and not _items(request.bank_accounts):
        return [
            Violation(
                "iban",
                "account_required",
                ViolationKind.STRUCTURAL,
                "Either iban or at least one bank account is required",
            )
        ]
    return []


def validate_due_date_order(request: PaymentRequest) -> list[Violation]:
    """Rule: ``paymentDueDate`` must not precede ``date``."""
    issued = parse_iso_date(request.date) if isinstance(request.date, str) else None
    due = (
        parse_iso_date(request.payment_due_date)
        if isinstance(request.payment_due_date, str)
        else None
    )
    if issued is None or due is None or due >= issued:
        return []
    return [
        Violation(
            "paymentDueDate",
            "date_order",
            ViolationKind.STRUCTURAL,
            f"Payment due date ({due}) is before date ({issued})",
        )
    ]


def validate_payment_options(request: PaymentRequest) -> list[Violation]:
    violations = check_list("paymentOptions", request.payment_options, "Payment options")
    known = {option.value for option in PaymentOption}
    for i, tag in enumerate(_items(request.payment_options)):
        if not isinstance(tag, str) or tag not in known:
            violations.append(
                Violation(
                    f"paymentOptions[{i}]",
                    "enum",
                    ViolationKind.ENUM,
                    f"Unknown payment option '{tag}'",
                )
            )
    return violations


def validate_bank_account_count(request: PaymentRequest) -> list[Violation]:
    if not isinstance(request.bank_accounts, LIST_TYPES):
        return check_list("bankAccounts", request.bank_accounts, "Bank accounts")
    if len(request.bank_accounts) > MAX_BANK_ACCOUNTS:
        return [
            Violation(
                "bankAccounts",
                "max_items",
                ViolationKind.LENGTH,
                f"Maximum {MAX_BANK_ACCOUNTS} bank accounts allowed",
            )
        ]
    return []


def validate_option_tags(
    request: PaymentRequest,
    severity: Severity = Severity.ERROR,
) -> list[Violation]:
    """
    Rule: an attached standing order or direct debit needs its tag.

    A standing order without ``standingorder`` in the payment options (or
    a direct debit without ``directdebit``) would be dropped by the encoder.
    """
    options = _items(request.payment_options)
    violations: list[Violation] = []
    attached = [
        ("standingOrder", request.standing_order, PaymentOption.STANDING_ORDER),
        ("directDebit", request.direct_debit, PaymentOption.DIRECT_DEBIT),
    ]
    for path, extension, option in attached:
        if extension is not None and option.value not in options:
            violations.append(
                Violation(
                    path,
                    "option_missing",
                    ViolationKind.STRUCTURAL,
                    f"{path} is set but '{option.value}' is not in paymentOptions",
                    severity,
                )
            )
    return violations


def validate_qr_size(request: PaymentRequest) -> list[Violation]:
    if request.qr_size is None:
        return [Violation("qrSize", "integer", ViolationKind.FORMAT, "QR size is required")]
    return check_int_range("qrSize", request.qr_size, QR_SIZE_MIN, QR_SIZE_MAX, "QR size")


def validate_bank_account(index: int, account: BankAccount) -> list[Violation]:
    """Check one entry of ``bankAccounts``; the IBAN is mandatory here."""
    prefix = f"bankAccounts[{index}]"
    if not isinstance(account, BankAccount):
        return [Violation(prefix, "type", ViolationKind.FORMAT, "Bank account entry is malformed")]
    if _is_unset(account.iban):
        violations = [
            Violation(
                f"{prefix}.iban",
                "required",
                ViolationKind.STRUCTURAL,
                "IBAN is mandatory",
            )
        ]
    else:
        violations = check_iban(f"{prefix}.iban", account.iban)
    violations.extend(check_swift(f"{prefix}.swift", account.swift))
    return violations


def validate_standing_order(order: StandingOrder) -> list[Violation]:
    violations = check_int_range("standingOrder.day", order.day, DAY_MIN, DAY_MAX, "Day")

    violations.extend(check_list("standingOrder.month", order.month, "Month"))
    months = _items(order.month)
    for i, month in enumerate(months):
        violations.extend(
            check_int_range(f"standingOrder.month[{i}]", month, MONTH_MIN, MONTH_MAX, "Month")
        )
    duplicates = sorted(m for m, n in Counter(m for m in months if _is_int(m)).items() if n > 1)
    if duplicates:
        violations.append(
            Violation(
                "standingOrder.month",
                "unique",
                ViolationKind.STRUCTURAL,
                f"Duplicate months: {', '.join(str(m) for m in duplicates)}",
            )
        )

    if _is_unset(order.periodicity):
        violations.append(
            Violation(
                "standingOrder.periodicity",
                "required",
                ViolationKind.ENUM,
                "Periodicity is mandatory for a standing order",
            )
        )
    elif not isinstance(order.periodicity, str) or Periodicity.parse(order.periodicity) is None:
        violations.append(
            Violation(
                "standingOrder.periodicity",
                "enum",
                ViolationKind.ENUM,
                f"Unknown periodicity '{order.periodicity}'",
            )
        )

    violations.extend(check_date("standingOrder.lastDate", order.last_date, "Last date"))
    return violations


def validate_direct_debit(debit: DirectDebit) -> list[Violation]:
    violations: list[Violation] = []

    if not _is_unset(debit.scheme) and (
        not isinstance(debit.scheme, str) or DirectDebitScheme.parse(debit.scheme) is None
    ):
        violations.append(
            Violation(
                "directDebit.scheme",
                "enum",
                ViolationKind.ENUM,
                f"Unknown direct debit scheme '{debit.scheme}'",
            )
        )

    if _is_unset(debit.type):
        violations.append(
            Violation(
                "directDebit.type",
                "required",
                ViolationKind.ENUM,
                "Direct debit type is mandatory (oneoff or recurrent)",
            )
        )
    elif not isinstance(debit.type, str) or DirectDebitType.parse(debit.type) is None:
        violations.append(
            Violation(
                "directDebit.type",
                "enum",
                ViolationKind.ENUM,
                f"Unknown direct debit type '{debit.type}'",
            )
        )

    violations.extend(check_digits("directDebit.variableSymbol", debit.variable_symbol, 10, "Variable symbol"))
    violations.extend(check_digits("directDebit.specificSymbol", debit.specific_symbol, 10, "Specific symbol"))
    violations.extend(
        check_max_length(
            "directDebit.originatorsReferenceInformation",
            debit.originators_reference_information,
            35,
            "Originators reference",
        )
    )
    violations.extend(check_max_length("directDebit.mandateId", debit.mandate_id, 35, "Mandate ID"))
    violations.extend(check_max_length("directDebit.creditorId", debit.creditor_id, 35, "Creditor ID"))
    violations.extend(check_max_length("directDebit.contractId", debit.contract_id, 35, "Contract ID"))
    violations.extend(check_min_amount("directDebit.maxAmount", debit.max_amount, "Max amount"))
    violations.extend(check_date("directDebit.validTillDate", debit.valid_till_date, "Valid till date"))
    return violations


class Validator:
    """
    Stateless rule checker for payment requests.

    Safe to share across threads: the only state is the severity used for
    missing payment-option tags, fixed at construction.

    Example:
        validator = Validator()
        violations = validator.validate(request)
        if not violations:
            encoder.encode(request)
    """

    def __init__(self, option_mismatch_severity: Severity = Severity.ERROR) -> None:
        self.option_mismatch_severity = Severity(option_mismatch_severity)

    @classmethod
    def from_settings(cls, settings: Any) -> Self:
        """Create a validator configured from a ``Settings`` instance."""
        return cls(option_mismatch_severity=Severity(settings.option_mismatch_severity))

    def validate(self, request: PaymentRequest) -> list[Violation]:
        """
        Run every rule against a request.

        Args:
            request: The payment request to check (not modified)

        Returns:
            All violations in field declaration order; empty when the
            request is ready for encoding
        """
        violations: list[Violation] = []

        # Top-level fields
        violations.extend(validate_amount(request))
        violations.extend(validate_currency(request))
        violations.extend(check_iban("iban", request.iban))
        violations.extend(validate_account_presence(request))
        violations.extend(check_swift("swift", request.swift))
        violations.extend(check_max_length("invoiceId", request.invoice_id, 10, "Invoice ID"))
        violations.extend(check_date("date", request.date, "Date"))
        violations.extend(check_date("paymentDueDate", request.payment_due_date, "Payment due date"))
        violations.extend(validate_due_date_order(request))
        violations.extend(check_digits("variableSymbol", request.variable_symbol, 10, "Variable symbol"))
        violations.extend(check_digits("constantSymbol", request.constant_symbol, 4, "Constant symbol"))
        violations.extend(check_digits("specificSymbol", request.specific_symbol, 10, "Specific symbol"))
        violations.extend(
            check_max_length(
                "originatorsReferenceInformation",
                request.originators_reference_information,
                35,
                "Originators reference",
            )
        )
        violations.extend(check_max_length("note", request.note, 140, "Note"))
        violations.extend(check_max_length("beneficiaryName", request.beneficiary_name, 70, "Beneficiary name"))
        violations.extend(
            check_max_length("beneficiaryAddress1", request.beneficiary_address1, 70, "Beneficiary address 1")
        )
        violations.extend(
            check_max_length("beneficiaryAddress2", request.beneficiary_address2, 70, "Beneficiary address 2")
        )
        violations.extend(validate_payment_options(request))
        violations.extend(validate_bank_account_count(request))
        violations.extend(validate_option_tags(request, self.option_mismatch_severity))
        violations.extend(validate_qr_size(request))

        # Nested objects
        for i, account in enumerate(_items(request.bank_accounts)):
            violations.extend(validate_bank_account(i, account))
        if request.standing_order is not None:
            violations.extend(validate_standing_order(request.standing_order))
        if request.direct_debit is not None:
            violations.extend(validate_direct_debit(request.direct_debit))

        logger.debug(f"Validated {request}: {len(violations)} violation(s)")
        return violations

    def is_valid(self, request: PaymentRequest) -> bool:
        """True if no violation has error severity."""
        return not any(v.is_error for v in self.validate(request))


_default_validator = Validator()


def validate(request: PaymentRequest) -> list[Violation]:
    """Validate with default settings (all violations are errors)."""
    return _default_validator.validate(request)
