"""
Pydantic schemas for the JSON form of payment requests.

The JSON contract uses camelCase names (``beneficiaryName``,
``bankAccounts[].iban``) and leaves out unset fields; an explicit None in
a field that has a default is written as null. These schemas only
check types; every business rule is left to
``paybysquare.domain.validation`` so that an incomplete request can be
loaded, inspected and reported on in full.
"""

from dataclasses import asdict
from decimal import Decimal
from typing import Any, Self

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializerFunctionWrapHandler,
    field_validator,
    model_serializer,
)
from pydantic.alias_generators import to_camel

from paybysquare.domain.models import (
    BankAccount,
    DirectDebit,
    PaymentRequest,
    Severity,
    StandingOrder,
    Violation,
    ViolationKind,
)


class _CamelModel(BaseModel):
    """Base for wire models: camelCase on the wire, snake_case accepted too."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @model_serializer(mode="wrap")
    def _omit_unset(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        """
        Leave out None for fields whose default is None.

        A None in a field with any other default (``currency``, ``qrSize``,
        ``directDebit.scheme``) is kept as an explicit null so loading it back
        does not bring the default back.
        """
        data = handler(self)
        optional = {
            key
            for name, info in type(self).model_fields.items()
            if info.default is None
            for key in (name, info.alias or to_camel(name))
        }
        return {key: value for key, value in data.items() if value is not None or key not in optional}


# =============================================================================
# Payment request
# =============================================================================

class BankAccountSchema(_CamelModel):
    iban: str | None = None
    swift: str | None = None

    def to_domain(self) -> BankAccount:
        return BankAccount(iban=self.iban, swift=self.swift)


class StandingOrderSchema(_CamelModel):
    day: int | None = None
    month: list[int] | None = None
    periodicity: str | None = None
    last_date: str | None = None

    def to_domain(self) -> StandingOrder:
        return StandingOrder(**self.model_dump())


class DirectDebitSchema(_CamelModel):
    scheme: str | None = "other"
    type: str | None = None
    variable_symbol: str | None = None
    specific_symbol: str | None = None
    originators_reference_information: str | None = None
    mandate_id: str | None = None
    creditor_id: str | None = None
    contract_id: str | None = None
    max_amount: Decimal | None = None
    valid_till_date: str | None = None

    def to_domain(self) -> DirectDebit:
        return DirectDebit(**self.model_dump())


class PaymentRequestSchema(_CamelModel):
    """
    JSON form of a PaymentRequest.

    Defaults match the domain model, so a payload that omits ``currency``
    or ``qrSize`` gets ``EUR`` and ``300``.
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
    beneficiary_address1: str | None = Field(default=None, alias="beneficiaryAddress1")
    beneficiary_address2: str | None = Field(default=None, alias="beneficiaryAddress2")
    payment_options: list[str] = Field(default_factory=list)
    bank_accounts: list[BankAccountSchema] = Field(default_factory=list)
    standing_order: StandingOrderSchema | None = None
    direct_debit: DirectDebitSchema | None = None
    with_frame: bool = True
    qr_size: int | None = 300

    @field_validator("payment_options", "bank_accounts", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @classmethod
    def from_domain(cls, request: PaymentRequest) -> Self:
        return cls.model_validate(asdict(request))

    def to_domain(self) -> PaymentRequest:
        scalars = self.model_dump(exclude={"bank_accounts", "standing_order", "direct_debit"})
        return PaymentRequest(
            **scalars,
            bank_accounts=[account.to_domain() for account in self.bank_accounts],
            standing_order=self.standing_order.to_domain() if self.standing_order else None,
            direct_debit=self.direct_debit.to_domain() if self.direct_debit else None,
        )


def dump_request(request: PaymentRequest) -> dict[str, Any]:
    """
    Serialize a request to a JSON-ready dict.

    Unset (None) fields are left out, except where the field has a
    non-None default: there None is written as null. Amounts become
    strings so no precision is lost.
    """
    return PaymentRequestSchema.from_domain(request).model_dump(mode="json", by_alias=True)


def load_request(data: dict[str, Any]) -> PaymentRequest:
    """
    Build a PaymentRequest from decoded JSON.

    Raises:
        pydantic.ValidationError: If a value has the wrong type
            (e.g. ``qrSize: "big"``)
    """
    return PaymentRequestSchema.model_validate(data).to_domain()


# =============================================================================
# Validation report
# =============================================================================

class ViolationSchema(_CamelModel):
    """Single violation as shown to API or CLI consumers."""
    field_path: str
    rule: str
    kind: ViolationKind
    message: str
    severity: Severity = Severity.ERROR


class ValidationReport(_CamelModel):
    """Outcome of validating one payment request."""
    valid: bool
    summary: str
    violations: list[ViolationSchema] = Field(default_factory=list)

    @classmethod
    def from_violations(cls, request: PaymentRequest, violations: list[Violation]) -> Self:
        return cls(
            valid=not any(v.is_error for v in violations),
            summary=str(request),
            violations=[
                ViolationSchema(
                    field_path=v.field_path,
                    rule=v.rule,
                    kind=v.kind,
                    message=v.message,
                    severity=v.severity,
                )
                for v in violations
            ],
        )
