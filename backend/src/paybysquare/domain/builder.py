"""
Fluent builders for payment requests.

Builders only assemble; they never validate. Dates may be given as
``date`` objects or strings and amounts as numbers or strings, and both
are converted to the stored form here.

Example:
    request = (
        PaymentRequestBuilder()
        .amount("25.50")
        .iban("SK3112000000198742637541")
        .beneficiary_name("Jan Novak")
        .payment_options("paymentorder", "standingorder")
        .standing_order().day(15).periodicity("monthly").done()
        .build()
    )
"""

import datetime
from copy import deepcopy
from decimal import Decimal
from typing import Any, Self

from ..config import Settings, get_settings
from .dates import format_iso_date
from .models import (
    BankAccount,
    DirectDebit,
    PaymentRequest,
    StandingOrder,
    coerce_decimal,
)


class StandingOrderBuilder:
    """Collects standing order fields for a parent PaymentRequestBuilder."""

    def __init__(self, parent: "PaymentRequestBuilder") -> None:
        self._parent = parent
        self._fields: dict[str, Any] = {}

    def day(self, day: int | None) -> Self:
        self._fields["day"] = day
        return self

    def month(self, *months: int) -> Self:
        self._fields["month"] = list(months)
        return self

    def periodicity(self, periodicity: str | None) -> Self:
        self._fields["periodicity"] = periodicity
        return self

    def last_date(self, value: datetime.date | str | None) -> Self:
        self._fields["last_date"] = format_iso_date(value)
        return self

    def done(self) -> "PaymentRequestBuilder":
        """Attach the standing order to the parent and return the parent."""
        self._parent._standing_order = StandingOrder(**self._fields)
        return self._parent


class DirectDebitBuilder:
    """Collects direct debit fields for a parent PaymentRequestBuilder."""

    def __init__(self, parent: "PaymentRequestBuilder") -> None:
        self._parent = parent
        self._fields: dict[str, Any] = {}

    def scheme(self, scheme: str | None) -> Self:
        self._fields["scheme"] = scheme
        return self

    def type(self, debit_type: str | None) -> Self:
        self._fields["type"] = debit_type
        return self

    def variable_symbol(self, symbol: str | None) -> Self:
        self._fields["variable_symbol"] = symbol
        return self

    def specific_symbol(self, symbol: str | None) -> Self:
        self._fields["specific_symbol"] = symbol
        return self

    def originators_reference_information(self, reference: str | None) -> Self:
        self._fields["originators_reference_information"] = reference
        return self

    def mandate_id(self, mandate_id: str | None) -> Self:
        self._fields["mandate_id"] = mandate_id
        return self

    def creditor_id(self, creditor_id: str | None) -> Self:
        self._fields["creditor_id"] = creditor_id
        return self

    def contract_id(self, contract_id: str | None) -> Self:
        self._fields["contract_id"] = contract_id
        return self

    def max_amount(self, amount: Decimal | int | float | str | None) -> Self:
        self._fields["max_amount"] = coerce_decimal(amount)
        return self

    def valid_till_date(self, value: datetime.date | str | None) -> Self:
        self._fields["valid_till_date"] = format_iso_date(value)
        return self

    def done(self) -> "PaymentRequestBuilder":
        """Attach the direct debit to the parent and return the parent."""
        self._parent._direct_debit = DirectDebit(**self._fields)
        return self._parent


class PaymentRequestBuilder:
    """
    Chained construction of a PaymentRequest.

    Currency, QR size and frame defaults come from ``Settings``: the one
    given, or the environment-backed ``get_settings()`` when none is.
    ``build()`` can be called repeatedly; each call returns an independent
    request.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        if settings is None:
            settings = get_settings()
        self._fields: dict[str, Any] = {
            "currency": settings.default_currency,
            "qr_size": settings.default_qr_size,
            "with_frame": settings.default_with_frame,
        }
        self._payment_options: list[str] = []
        self._bank_accounts: list[BankAccount] = []
        self._standing_order: StandingOrder | None = None
        self._direct_debit: DirectDebit | None = None

    def _set(self, name: str, value: Any) -> Self:
        self._fields[name] = value
        return self

    def amount(self, amount: Decimal | int | float | str | None) -> Self:
        return self._set("amount", coerce_decimal(amount))

    def currency(self, currency: str | None) -> Self:
        return self._set("currency", currency)

    def iban(self, iban: str | None) -> Self:
        return self._set("iban", iban)

    def swift(self, swift: str | None) -> Self:
        return self._set("swift", swift)

    def invoice_id(self, invoice_id: str | None) -> Self:
        return self._set("invoice_id", invoice_id)

    def date(self, value: datetime.date | str | None) -> Self:
        return self._set("date", format_iso_date(value))

    def payment_due_date(self, value: datetime.date | str | None) -> Self:
        return self._set("payment_due_date", format_iso_date(value))

    def variable_symbol(self, symbol: str | None) -> Self:
        return self._set("variable_symbol", symbol)

    def constant_symbol(self, symbol: str | None) -> Self:
        return self._set("constant_symbol", symbol)

    def specific_symbol(self, symbol: str | None) -> Self:
        return self._set("specific_symbol", symbol)

    def originators_reference_information(self, reference: str | None) -> Self:
        return self._set("originators_reference_information", reference)

    def note(self, note: str | None) -> Self:
        return self._set("note", note)

    def beneficiary_name(self, name: str | None) -> Self:
        return self._set("beneficiary_name", name)

    def beneficiary_address(self, line1: str | None, line2: str | None = None) -> Self:
        self._fields["beneficiary_address1"] = line1
        self._fields["beneficiary_address2"] = line2
        return self

    def payment_options(self, *options: str) -> Self:
        """Replace the payment options; order sets encoding priority."""
        self._payment_options = list(options)
        return self

    def bank_account(self, iban: str | None, swift: str | None = None) -> Self:
        """Append one receiving account."""
        self._bank_accounts.append(BankAccount(iban=iban, swift=swift))
        return self

    def with_frame(self, with_frame: bool) -> Self:
        return self._set("with_frame", with_frame)

    def qr_size(self, size: int | None) -> Self:
        return self._set("qr_size", size)

    def standing_order(self) -> StandingOrderBuilder:
        return StandingOrderBuilder(self)

    def direct_debit(self) -> DirectDebitBuilder:
        return DirectDebitBuilder(self)

    def build(self) -> PaymentRequest:
        return PaymentRequest(
            **self._fields,
            payment_options=list(self._payment_options),
            bank_accounts=deepcopy(self._bank_accounts),
            standing_order=deepcopy(self._standing_order),
            direct_debit=deepcopy(self._direct_debit),
        )
