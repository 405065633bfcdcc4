"""HOTP / TOTP code derivation (RFC 4226, RFC 6238).

The engine never reads the clock: TOTP callers turn a unix timestamp into a
counter with :func:`time_counter` and pass that in, which keeps every
function here deterministic.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import math
import re
import struct
from typing import Union

from passentry.core.errors import (
    InvalidAlgorithmError,
    InvalidCounterError,
    InvalidDigitsError,
    InvalidSecretError,
    OtpError,
)
from passentry.core.models import OtpAlgorithm, OtpResult
from passentry.utils.logging import get_logger

logger = get_logger("OtpEngine")

MIN_DIGITS = 6
MAX_DIGITS = 10
DEFAULT_DIGITS = 6
DEFAULT_PERIOD = 30

_MAX_COUNTER = 2**64 - 1
_SECRET_NOISE = re.compile(r"[\s-]+")
_DIGESTS = {
    OtpAlgorithm.SHA1: hashlib.sha1,
    OtpAlgorithm.SHA256: hashlib.sha256,
    OtpAlgorithm.SHA512: hashlib.sha512,
}


def resolve_algorithm(algorithm: Union[OtpAlgorithm, str]) -> OtpAlgorithm:
    """Map an enum member or a case-insensitive name to :class:`OtpAlgorithm`."""
    if isinstance(algorithm, OtpAlgorithm):
        return algorithm
    try:
        return OtpAlgorithm(str(algorithm).strip().upper())
    except ValueError as exc:
        raise InvalidAlgorithmError(f"Unsupported OTP algorithm: {algorithm!r}") from exc


def decode_secret(secret: str) -> bytes:
    """
    Decode a base32 shared secret.

    Whitespace and dashes are ignored and lowercase is accepted. Missing
    padding is restored, but padding that is present must be correct.
    """
    normalized = _SECRET_NOISE.sub("", secret or "").upper()
    if not normalized.rstrip("="):
        raise InvalidSecretError("OTP secret is empty")
    if "=" not in normalized and len(normalized) % 8:
        normalized += "=" * (8 - len(normalized) % 8)
    try:
        return base64.b32decode(normalized)
    except ValueError as exc:  # binascii.Error, or non-ASCII input
        raise InvalidSecretError("OTP secret is not valid base32") from exc


def dynamic_truncate(digest: bytes) -> int:
    """Select four bytes at the offset named by the last nibble and drop the sign bit."""
    offset = digest[-1] & 0x0F
    return struct.unpack(">I", digest[offset:offset + 4])[0] & 0x7FFFFFFF


def derive_code(
    secret: str,
    counter: int,
    algorithm: Union[OtpAlgorithm, str] = OtpAlgorithm.SHA1,
    digits: int = DEFAULT_DIGITS,
) -> str:
    """Return the zero-padded code for ``counter``.

    Raises:
        InvalidAlgorithmError: ``algorithm`` is not SHA1, SHA256 or SHA512.
        InvalidDigitsError: ``digits`` is not an int between 6 and 10.
        InvalidCounterError: ``counter`` is negative or wider than 64 bits.
        InvalidSecretError: ``secret`` is empty or not base32.
    """
    algo = resolve_algorithm(algorithm)
    if isinstance(digits, bool) or not isinstance(digits, int) or not MIN_DIGITS <= digits <= MAX_DIGITS:
        raise InvalidDigitsError(f"OTP codes must be {MIN_DIGITS} to {MAX_DIGITS} digits long, got {digits!r}")
    if isinstance(counter, bool) or not isinstance(counter, int) or not 0 <= counter <= _MAX_COUNTER:
        raise InvalidCounterError(f"OTP counter must be an unsigned 64-bit integer, got {counter!r}")
    key = decode_secret(secret)

    digest = hmac.new(key, struct.pack(">Q", counter), _DIGESTS[algo]).digest()
    code = dynamic_truncate(digest) % 10**digits
    return str(code).zfill(digits)


def calculate_code(
    secret: str,
    counter: int,
    algorithm: Union[OtpAlgorithm, str] = OtpAlgorithm.SHA1,
    digits: int = DEFAULT_DIGITS,
) -> OtpResult:
    """Same as :func:`derive_code`, but failures come back inside the result."""
    try:
        return OtpResult.success(derive_code(secret, counter, algorithm, digits))
    except OtpError as exc:
        logger.debug("OTP derivation failed: %s", exc)
        return OtpResult.failure(exc)


def time_counter(timestamp: float, period: int = DEFAULT_PERIOD) -> int:
    """TOTP moving factor: whole ``period``-second steps since the unix epoch."""
    if period <= 0:
        raise ValueError(f"TOTP period must be positive, got {period!r}")
    if not math.isfinite(timestamp):
        raise InvalidCounterError(f"Timestamp must be a finite number, got {timestamp!r}")
    return int(timestamp) // period
