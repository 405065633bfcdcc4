"""Entry parser, OTP engine and the value types they share."""

from .engine import calculate_code, derive_code, time_counter
from .errors import (
    InvalidAlgorithmError,
    InvalidCounterError,
    InvalidDigitsError,
    InvalidSecretError,
    MissingOtpParametersError,
    OtpError,
)
from .extractors import OtpauthUriExtractor, UriToOtpParameters
from .models import Entry, OtpAlgorithm, OtpParameters, OtpResult, OtpType
from .parser import EntryParser, parse_entry
from .settings import ParserSettings

__all__ = [
    "calculate_code",
    "derive_code",
    "time_counter",
    "InvalidAlgorithmError",
    "InvalidCounterError",
    "InvalidDigitsError",
    "InvalidSecretError",
    "MissingOtpParametersError",
    "OtpError",
    "OtpauthUriExtractor",
    "UriToOtpParameters",
    "Entry",
    "OtpAlgorithm",
    "OtpParameters",
    "OtpResult",
    "OtpType",
    "EntryParser",
    "parse_entry",
    "ParserSettings",
]
