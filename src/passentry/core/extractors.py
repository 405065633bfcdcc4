"""Pluggable readers that turn a single line into OTP parameters."""

from __future__ import annotations

from typing import Dict, List, Optional, Protocol
from urllib.parse import parse_qs, unquote, urlparse

from pydantic import ValidationError

from passentry.core.models import OtpAlgorithm, OtpParameters, OtpType
from passentry.utils.logging import get_logger

logger = get_logger("UriExtractor")


class UriToOtpParameters(Protocol):
    """Capability used by the entry parser to recognise an OTP URI line.

    Implementations must be side-effect free and reentrant. They return
    ``None`` for anything they do not recognise instead of raising.
    """

    def extract(self, line: str) -> Optional[OtpParameters]:
        ...


class OtpauthUriExtractor:
    """Reads the ``otpauth://totp/...`` and ``otpauth://hotp/...`` key URI format."""

    SCHEME = "otpauth"

    def extract(self, line: str) -> Optional[OtpParameters]:
        candidate = line.strip()
        if not candidate.lower().startswith(self.SCHEME + "://"):
            return None

        try:
            parsed = urlparse(candidate)
        except ValueError as exc:
            logger.debug("Ignoring unparsable otpauth URI: %s", exc)
            return None

        try:
            otp_type = OtpType(parsed.netloc.lower())
        except ValueError:
            logger.debug("Ignoring otpauth URI with unknown type %r", parsed.netloc)
            return None

        query = parse_qs(parsed.query)
        secret = _first(query, "secret")
        if not secret:
            logger.debug("Ignoring otpauth URI without a secret")
            return None

        issuer, account = _split_label(parsed.path)
        issuer = _first(query, "issuer") or issuer

        algorithm = (_first(query, "algorithm") or OtpAlgorithm.SHA1.value).upper()
        if algorithm not in OtpAlgorithm.__members__:
            logger.debug("Ignoring otpauth URI with unsupported algorithm %r", algorithm)
            return None

        try:
            digits = _int_param(query, "digits", 6)
            period = _int_param(query, "period", 30)
            counter = _int_param(query, "counter", None)
            return OtpParameters(
                secret=secret,
                algorithm=OtpAlgorithm[algorithm],
                digits=digits,
                period=period,
                type=otp_type,
                counter=counter if otp_type is OtpType.HOTP else None,
                issuer=issuer,
                account=account,
            )
        except ValueError as exc:  # includes pydantic ValidationError
            reason = "; ".join(err["msg"] for err in exc.errors()) if isinstance(exc, ValidationError) else str(exc)
            logger.debug("Ignoring malformed otpauth URI: %s", reason)
            return None


def _first(query: Dict[str, List[str]], key: str) -> Optional[str]:
    values = query.get(key)
    if not values:
        return None
    return values[0].strip() or None


def _int_param(query: Dict[str, List[str]], key: str, default: Optional[int]) -> Optional[int]:
    raw = _first(query, key)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{key} must be an integer") from exc


def _split_label(path: str) -> tuple[Optional[str], Optional[str]]:
    label = unquote(path[1:] if path.startswith("/") else path).strip()
    if not label:
        return None, None
    if ":" in label:
        issuer, account = label.split(":", 1)
        return issuer.strip() or None, account.strip() or None
    return None, label
