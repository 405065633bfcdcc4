from __future__ import annotations

import pytest
from pydantic import ValidationError

from passentry.core.errors import InvalidCounterError, InvalidDigitsError, MissingOtpParametersError
from passentry.core.models import Entry, OtpParameters, OtpType
from passentry.core.parser import parse_entry

TOTP_URI = (
    "otpauth://totp/ACME%20Co:john@example.com?secret=HXDMVJECJJWSRB3HWIZR4IFUGFTMXBOZ"
    "&issuer=ACME%20Co&algorithm=SHA1&digits=6&period=30"
)


def test_generates_otp_from_totp_uri():
    entry = parse_entry("secret\n" + TOTP_URI)
    assert entry.has_totp()
    result = entry.calculate_code(8640)
    assert result.ok
    assert len(result.code) == entry.otp_parameters.digits
    assert result.code == "545293"


def test_code_is_stable_within_a_period():
    entry = parse_entry("secret\n" + TOTP_URI)
    assert entry.calculate_code(8640).code == entry.calculate_code(8669.9).code == "545293"


def test_code_defaults_to_current_time():
    entry = parse_entry("secret\n" + TOTP_URI)
    result = entry.calculate_code()
    assert result.ok
    assert result.code.isdigit()
    assert len(result.code) == 6


def test_hotp_entry_uses_stored_counter():
    entry = parse_entry("pw\notpauth://hotp/x?secret=GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ&counter=1")
    assert entry.calculate_code(0).code == "287082"
    assert entry.calculate_code(123456789).code == "287082"


def test_hotp_entry_without_counter_starts_at_zero():
    entry = parse_entry("pw\notpauth://hotp/x?secret=GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ")
    assert entry.calculate_code().code == "755224"


def test_entry_without_otp_reports_missing_parameters():
    result = parse_entry("pw\nlogin: alice").calculate_code(0)
    assert not result.ok
    assert isinstance(result.error, MissingOtpParametersError)


def test_invalid_digits_surface_from_entry():
    entry = parse_entry("pw\notpauth://totp/x?secret=HXDMVJECJJWSRB3HWIZR4IFUGFTMXBOZ&digits=11")
    assert entry.has_totp()
    assert isinstance(entry.calculate_code(0).error, InvalidDigitsError)


def test_predicates_follow_optionals():
    assert not Entry().has_username()
    assert not Entry().has_totp()
    entry = Entry(username="alice", otp_parameters=OtpParameters(secret="GEZDGNBVGY3TQOJQ"))
    assert entry.has_username()
    assert entry.has_totp()


def test_models_are_immutable():
    entry = parse_entry("pw\nlogin: alice\n" + TOTP_URI)
    with pytest.raises(ValidationError):
        entry.password = "changed"
    with pytest.raises(ValidationError):
        OtpParameters(secret="GEZDGNBVGY3TQOJQ").digits = 8


@pytest.mark.parametrize(
    "kwargs",
    [
        {"secret": ""},
        {"secret": "GEZDGNBVGY3TQOJQ", "period": 0},
        {"secret": "GEZDGNBVGY3TQOJQ", "counter": -1},
        {"secret": "GEZDGNBVGY3TQOJQ", "algorithm": "MD5"},
    ],
)
def test_otp_parameters_validation(kwargs):
    with pytest.raises(ValidationError):
        OtpParameters(**kwargs)


def test_otp_parameters_defaults():
    params = OtpParameters(secret="GEZDGNBVGY3TQOJQ")
    assert params.digits == 6
    assert params.period == 30
    assert params.type is OtpType.TOTP
    assert params.counter is None


def test_time_helpers():
    params = OtpParameters(secret="GEZDGNBVGY3TQOJQ", period=30)
    assert params.time_counter(8640) == 288
    assert params.remaining_seconds(8640) == 30
    assert params.remaining_seconds(8659.5) == 11
    assert params.remaining_seconds(8669) == 1


@pytest.mark.parametrize("timestamp", [float("nan"), float("inf"), float("-inf")])
def test_non_finite_timestamp_is_reported_as_invalid_counter(timestamp):
    result = parse_entry("secret\n" + TOTP_URI).calculate_code(timestamp)
    assert not result.ok
    assert isinstance(result.error, InvalidCounterError)
