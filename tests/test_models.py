"""
Unit tests for the payment request data model.
"""

from decimal import Decimal

import pytest

from paybysquare.domain.models import (
    BankAccount,
    DirectDebit,
    DirectDebitType,
    PaymentOption,
    PaymentRequest,
    Periodicity,
    StandingOrder,
    coerce_decimal,
)

from conftest import IBAN, IBAN_2


class TestPaymentRequest:

    def test_defaults(self):
        request = PaymentRequest()

        assert request.amount is None
        assert request.currency == "EUR"
        assert request.with_frame is True
        assert request.qr_size == 300
        assert request.payment_options == []
        assert request.bank_accounts == []
        assert request.standing_order is None
        assert request.direct_debit is None

    def test_lists_not_shared_between_instances(self):
        first = PaymentRequest()
        second = PaymentRequest()

        first.bank_accounts.append(BankAccount(IBAN))
        first.payment_options.append("paymentorder")

        assert second.bank_accounts == []
        assert second.payment_options == []

    def test_create(self):
        request = PaymentRequest.create("25.50", IBAN, "Jan Novak")

        assert request.amount == Decimal("25.50")
        assert request.iban == IBAN
        assert request.beneficiary_name == "Jan Novak"
        assert request.currency == "EUR"

    @pytest.mark.parametrize("amount,expected", [
        (25.5, Decimal("25.5")),
        (10, Decimal("10")),
        (Decimal("0.01"), Decimal("0.01")),
        (" 7.20 ", Decimal("7.20")),
        ("", None),
        (None, None),
    ])
    def test_create_coerces_amount(self, amount, expected):
        assert PaymentRequest.create(amount, IBAN, None).amount == expected

    def test_create_never_fails_on_bad_amount(self):
        request = PaymentRequest.create("twenty", IBAN, None)
        assert request.amount == "twenty"

    def test_assignment_is_plain_storage(self):
        request = PaymentRequest()

        request.qr_size = 5000
        request.currency = "euro"

        assert request.qr_size == 5000
        assert request.currency == "euro"

    def test_summary(self):
        request = PaymentRequest.create("25.50", IBAN, "Jan Novak")
        request.variable_symbol = "2024001"

        summary = str(request)

        assert "25.50" in summary
        assert "EUR" in summary
        assert IBAN in summary
        assert "Jan Novak" in summary
        assert "2024001" in summary

    def test_primary_account_prefers_bank_accounts(self):
        request = PaymentRequest.create("1", IBAN, None)
        assert request.primary_account == IBAN

        request.bank_accounts = [BankAccount(IBAN_2)]
        assert request.primary_account == IBAN_2


class TestStandingOrder:

    @pytest.mark.parametrize("given,stored", [
        ("monthly", "m"),
        ("MONTHLY", "m"),
        ("biweekly", "b"),
        ("bimonthly", "B"),
        ("b", "b"),
        ("B", "B"),
        ("annual", "a"),
        ("fortnightly", "fortnightly"),
        (None, None),
    ])
    def test_periodicity_normalized_at_construction(self, given, stored):
        assert StandingOrder(periodicity=given).periodicity == stored

    def test_assignment_not_normalized(self):
        order = StandingOrder(periodicity="m")
        order.periodicity = "weekly"
        assert order.periodicity == "weekly"


class TestDirectDebit:

    def test_default_scheme(self):
        assert DirectDebit().scheme == "other"

    @pytest.mark.parametrize("given,stored", [
        ("one-off", "oneoff"),
        ("oneoff", "oneoff"),
        ("ONE-OFF", "oneoff"),
        ("Recurrent", "recurrent"),
        ("sometimes", "sometimes"),
    ])
    def test_type_normalized_at_construction(self, given, stored):
        assert DirectDebit(type=given).type == stored

    @pytest.mark.parametrize("token", ["re-current", "r_e_c_u_r_r_e_n_t", "one_off", "o-n-e-o-f-f"])
    def test_type_with_stray_punctuation_kept_as_given(self, token):
        assert DirectDebitType.parse(token) is None
        assert DirectDebit(type=token).type == token

    def test_scheme_lowercased(self):
        assert DirectDebit(scheme="SEPA").scheme == "sepa"

    def test_max_amount_coerced(self):
        assert DirectDebit(max_amount="150").max_amount == Decimal("150")


class TestEnums:

    def test_payment_option_bits(self):
        assert [o.bit for o in PaymentOption] == [1, 2, 4]

    def test_periodicity_parse_is_case_sensitive_for_codes(self):
        assert Periodicity.parse("b") is Periodicity.BIWEEKLY
        assert Periodicity.parse("B") is Periodicity.BIMONTHLY
        assert Periodicity.parse("M") is None

    def test_direct_debit_type_parse(self):
        assert DirectDebitType.parse("one-off") is DirectDebitType.ONE_OFF
        assert DirectDebitType.parse("") is None


def test_coerce_decimal_leaves_other_types():
    assert coerce_decimal(True) is True
    assert coerce_decimal([1]) == [1]
