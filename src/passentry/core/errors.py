"""Typed failures raised while deriving one-time password codes."""

from __future__ import annotations


class OtpError(ValueError):
    """Base class for recoverable OTP derivation failures."""


class InvalidSecretError(OtpError):
    """The shared secret is empty or not valid base32."""


class InvalidDigitsError(OtpError):
    """The requested code length is outside the supported 6-10 range."""


class InvalidAlgorithmError(OtpError):
    """The requested HMAC hash algorithm is not supported."""


class InvalidCounterError(OtpError):
    """The moving factor is negative or does not fit in eight bytes."""


class MissingOtpParametersError(OtpError):
    """A code was requested from an entry without OTP parameters."""


__all__ = [
    "OtpError",
    "InvalidSecretError",
    "InvalidDigitsError",
    "InvalidAlgorithmError",
    "InvalidCounterError",
    "MissingOtpParametersError",
]
