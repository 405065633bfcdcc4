"""Value objects shared by the entry parser and the OTP engine."""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from passentry.core.errors import MissingOtpParametersError, OtpError


class OtpAlgorithm(str, Enum):
    """HMAC hash functions accepted for code derivation."""

    SHA1 = "SHA1"
    SHA256 = "SHA256"
    SHA512 = "SHA512"


class OtpType(str, Enum):
    TOTP = "totp"
    HOTP = "hotp"


class OtpParameters(BaseModel):
    """Shared secret and derivation settings attached to an entry."""

    model_config = ConfigDict(frozen=True)

    secret: str = Field(min_length=1)
    algorithm: OtpAlgorithm = OtpAlgorithm.SHA1
    # Range is checked at derivation time so malformed files still parse.
    digits: int = 6
    period: int = Field(default=30, gt=0)
    type: OtpType = OtpType.TOTP
    counter: Optional[int] = Field(default=None, ge=0)
    issuer: Optional[str] = None
    account: Optional[str] = None

    def time_counter(self, timestamp: float) -> int:
        """Return the TOTP time-step index for a unix timestamp in seconds."""
        from passentry.core.engine import time_counter

        return time_counter(timestamp, self.period)

    def remaining_seconds(self, timestamp: float) -> int:
        """Seconds left before the code for ``timestamp`` rolls over."""
        return self.period - int(timestamp) % self.period


@dataclass(frozen=True, slots=True)
class OtpResult:
    """Outcome of a code derivation: either ``code`` or ``error`` is set."""

    code: Optional[str] = None
    error: Optional[OtpError] = None

    def __post_init__(self) -> None:
        if (self.code is None) == (self.error is None):
            raise ValueError("OtpResult needs exactly one of code or error")

    @classmethod
    def success(cls, code: str) -> "OtpResult":
        return cls(code=code)

    @classmethod
    def failure(cls, error: OtpError) -> "OtpResult":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> str:
        """Return the code or raise the stored error."""
        if self.error is not None:
            raise self.error
        return self.code  # type: ignore[return-value]


class Entry(BaseModel):
    """One decrypted password file split into its semantic fields."""

    model_config = ConfigDict(frozen=True)

    password: str = ""
    extra_content: str = ""
    username: Optional[str] = None
    otp_parameters: Optional[OtpParameters] = None
    extra_content_without_auth_data: str = ""

    def has_username(self) -> bool:
        return self.username is not None

    def has_totp(self) -> bool:
        return self.otp_parameters is not None

    def calculate_code(self, timestamp: Optional[float] = None) -> OtpResult:
        """Derive the code that is valid at ``timestamp`` (defaults to now).

        HOTP entries ignore the timestamp and use their stored counter.
        """
        from passentry.core.engine import calculate_code

        params = self.otp_parameters
        if params is None:
            return OtpResult.failure(MissingOtpParametersError("Entry has no one-time password configured"))
        if params.type is OtpType.HOTP:
            counter = params.counter or 0
        else:
            try:
                counter = params.time_counter(time.time() if timestamp is None else timestamp)
            except OtpError as exc:
                return OtpResult.failure(exc)
        return calculate_code(params.secret, counter, params.algorithm, params.digits)
