"""
Pytest configuration and fixtures for the payment request tests.
"""

from decimal import Decimal

import pytest

from paybysquare.config import get_settings
from paybysquare.domain.models import (
    BankAccount,
    DirectDebit,
    PaymentRequest,
    StandingOrder,
)

IBAN = "SK3112000000198742637541"
IBAN_2 = "CZ6508000000192000145399"
SWIFT = "TATRSKBX"


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Drop cached settings so env changes in one test don't leak."""
    for name in ("OPTION_MISMATCH_SEVERITY", "DEFAULT_CURRENCY", "DEFAULT_QR_SIZE", "DEFAULT_WITH_FRAME", "LOG_LEVEL"):
        monkeypatch.delenv(f"PAYBYSQUARE_{name}", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def simple_request() -> PaymentRequest:
    """Single-account payment order with only the essentials set."""
    return PaymentRequest.create("25.50", IBAN, "Jan Novak")


@pytest.fixture
def full_request() -> PaymentRequest:
    """A request that uses every field, all values valid."""
    return PaymentRequest(
        amount=Decimal("100.00"),
        currency="EUR",
        iban=IBAN,
        swift=SWIFT,
        invoice_id="INV-2024",
        date="2024-06-01",
        payment_due_date="2024-06-15",
        variable_symbol="1234567890",
        constant_symbol="0308",
        specific_symbol="42",
        originators_reference_information="REF-2024-001",
        note="Rent for June",
        beneficiary_name="Jan Novak",
        beneficiary_address1="Hlavna 1",
        beneficiary_address2="811 01 Bratislava",
        payment_options=["paymentorder", "standingorder", "directdebit"],
        bank_accounts=[BankAccount(IBAN, SWIFT), BankAccount(IBAN_2)],
        standing_order=StandingOrder(
            day=15,
            month=[1, 2, 3],
            periodicity="monthly",
            last_date="2025-06-01",
        ),
        direct_debit=DirectDebit(
            scheme="sepa",
            type="one-off",
            variable_symbol="123",
            mandate_id="MANDATE-1",
            creditor_id="SK12ZZZ70000000001",
            contract_id="C-1",
            max_amount=Decimal("150.00"),
            valid_till_date="2025-12-31",
        ),
        with_frame=False,
        qr_size=500,
    )
