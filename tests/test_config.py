"""
Unit tests for environment-driven settings.
"""

from paybysquare.config import Settings, get_settings
from paybysquare.domain.models import Severity, StandingOrder
from paybysquare.domain.validation import Validator


def test_defaults():
    settings = Settings()

    assert settings.default_currency == "EUR"
    assert settings.default_qr_size == 300
    assert settings.default_with_frame is True
    assert settings.option_mismatch_severity == "error"
    assert settings.log_level == "INFO"


def test_env_override(monkeypatch):
    monkeypatch.setenv("PAYBYSQUARE_OPTION_MISMATCH_SEVERITY", "warning")
    monkeypatch.setenv("PAYBYSQUARE_DEFAULT_CURRENCY", "CZK")

    settings = get_settings()

    assert settings.option_mismatch_severity == "warning"
    assert settings.default_currency == "CZK"


def test_settings_cached():
    assert get_settings() is get_settings()


def test_validator_from_settings(simple_request):
    simple_request.standing_order = StandingOrder(periodicity="m")
    validator = Validator.from_settings(Settings(option_mismatch_severity="warning"))

    violations = validator.validate(simple_request)

    assert validator.option_mismatch_severity is Severity.WARNING
    assert [v.severity for v in violations] == [Severity.WARNING]
