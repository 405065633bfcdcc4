"""Heuristic parser for the plaintext of a decrypted password file.

The first line is the password. Everything after it is free-form extra
content in which a username field and OTP data are looked up:

* OTP URIs are only recognised on the first line of the extra content.
  When there is none, a ``totp: <secret>`` style field on any line is used.
* The username is the value of the first ``key: value`` / ``key value``
  line, in file order, whose key is a known username synonym.
"""

from __future__ import annotations

import re
from typing import FrozenSet, List, Optional, Set, Tuple

from passentry.core.extractors import OtpauthUriExtractor, UriToOtpParameters
from passentry.core.models import Entry, OtpParameters
from passentry.core.settings import ParserSettings
from passentry.utils.logging import get_logger

logger = get_logger("EntryParser")

# key, then either a colon with optional blanks around it or plain blanks, then the value
_FIELD_LINE = re.compile(r"^\s*(?P<key>[^\s:]+)(?:\s*:\s*|\s+)(?P<value>.*?)\s*$")


class EntryParser:
    """Builds :class:`Entry` objects. Stateless once constructed."""

    def __init__(
        self,
        uri_extractor: Optional[UriToOtpParameters] = None,
        settings: Optional[ParserSettings] = None,
    ) -> None:
        self._extractor = uri_extractor or OtpauthUriExtractor()
        self._settings = settings or ParserSettings()
        self._username_fields: FrozenSet[str] = frozenset(self._settings.username_fields)
        self._secret_fields: FrozenSet[str] = frozenset(self._settings.secret_fields)

    def parse(self, raw: str) -> Entry:
        password, _, extra_content = raw.partition("\n")
        lines = extra_content.split("\n")

        otp_parameters, otp_line = self._find_otp(lines)
        username, username_line = _find_field(lines, self._username_fields)
        logger.debug(
            "Parsed entry with %d extra line(s): username=%s otp=%s",
            len(lines) if extra_content else 0,
            username is not None,
            otp_parameters is not None,
        )
        return Entry(
            password=password,
            extra_content=extra_content,
            username=username,
            otp_parameters=otp_parameters,
            extra_content_without_auth_data=_drop_lines(lines, {otp_line, username_line}),
        )

    def _find_otp(self, lines: List[str]) -> Tuple[Optional[OtpParameters], Optional[int]]:
        params = self._extractor.extract(lines[0])
        if params is not None:
            return params, 0
        secret, index = _find_field(lines, self._secret_fields)
        if secret is None:
            return None, None
        params = OtpParameters(
            secret=secret,
            digits=self._settings.default_digits,
            period=self._settings.default_period,
        )
        return params, index


def parse_entry(raw: str, uri_extractor: Optional[UriToOtpParameters] = None) -> Entry:
    """Parse ``raw`` with the default settings."""
    return EntryParser(uri_extractor).parse(raw)


def _find_field(lines: List[str], fields: FrozenSet[str]) -> Tuple[Optional[str], Optional[int]]:
    for index, line in enumerate(lines):
        match = _FIELD_LINE.match(line)
        if match is None or not match.group("value"):
            continue
        if match.group("key").casefold() in fields:
            return match.group("value"), index
    return None, None


def _drop_lines(lines: List[str], indexes: Set[Optional[int]]) -> str:
    return "\n".join(line for index, line in enumerate(lines) if index not in indexes)
