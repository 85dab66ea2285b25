"""String format predicates and ISO date/time parsing."""

from __future__ import annotations

import ipaddress
import re
from datetime import date, datetime, timedelta, timezone

_EMAIL_LOCAL = re.compile(r"^[A-Za-z0-9!#$%&'*+/=?^_`{|}~.-]+$")
_HOST_LABEL = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?$")
_UUID = re.compile(r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$")
_IPV4 = re.compile(r"^(?:(?:25[0-5]|2[0-4][0-9]|1[0-9]{2}|[1-9]?[0-9])\.){3}(?:25[0-5]|2[0-4][0-9]|1[0-9]{2}|[1-9]?[0-9])$")
_BASE64 = re.compile(r"^[A-Za-z0-9+/]*={0,2}$")
_ISO_DATE = re.compile(r"^([0-9]{4})-([0-9]{2})-([0-9]{2})$")
_ISO_TIME = re.compile(r"^(?:[01][0-9]|2[0-3]):[0-5][0-9](?::[0-5][0-9](?:\.[0-9]+)?)?$")
_RFC3339 = re.compile(
    r"^([0-9]{4})-([0-9]{2})-([0-9]{2})[Tt ]"
    r"([0-9]{2}):([0-9]{2})(?::([0-9]{2})(?:\.([0-9]+))?)?"
    r"([Zz]|[+-][0-9]{2}:?[0-9]{2})?$"
)
_CUID2 = re.compile(r"^[a-z][a-z0-9]*$")
_ULID = re.compile(r"^[0-9A-HJKMNP-TV-Za-hjkmnp-tv-z]{26}$")
_NANOID = re.compile(r"^[A-Za-z0-9_-]+$")

_EMOJI_RANGES = (
    (0x1F600, 0x1F64F),
    (0x1F300, 0x1F5FF),
    (0x1F680, 0x1F6FF),
    (0x1F1E0, 0x1F1FF),
    (0x2600, 0x26FF),
    (0x2700, 0x27BF),
    (0xFE00, 0xFE0F),
    (0x1F900, 0x1F9FF),
    (0x1FA00, 0x1FA6F),
    (0x1FA70, 0x1FAFF),
    (0x200D, 0x200D),
    (0x20E3, 0x20E3),
    (0xE0020, 0xE007F),
)


def is_hostname(text: str) -> bool:
    if not text or len(text) > 253:
        return False
    return all(_HOST_LABEL.match(label) for label in text.split("."))


def is_email(text: str) -> bool:
    local, sep, domain = text.partition("@")
    if not sep or not local or len(local) > 64:
        return False
    if not _EMAIL_LOCAL.match(local):
        return False
    return "." in domain and is_hostname(domain)


def is_url(text: str) -> bool:
    for scheme in ("http://", "https://"):
        if text.startswith(scheme):
            rest = text[len(scheme):]
            return bool(rest) and not any(ch.isspace() for ch in text)
    return False


def is_uuid(text: str) -> bool:
    return _UUID.match(text) is not None


def is_ipv4(text: str) -> bool:
    return _IPV4.match(text) is not None


def is_ipv6(text: str) -> bool:
    if "%" in text:
        return False
    try:
        ipaddress.IPv6Address(text)
    except ValueError:
        return False
    return True


def is_base64(text: str) -> bool:
    return bool(text) and len(text) % 4 == 0 and _BASE64.match(text) is not None


def is_iso_date(text: str) -> bool:
    return parse_iso_date(text) is not None


def is_iso_time(text: str) -> bool:
    return _ISO_TIME.match(text) is not None


def is_iso_datetime(text: str) -> bool:
    return parse_rfc3339(text) is not None


def is_cuid2(text: str) -> bool:
    return _CUID2.match(text) is not None


def is_ulid(text: str) -> bool:
    return _ULID.match(text) is not None


def is_nanoid(text: str) -> bool:
    return _NANOID.match(text) is not None


def is_emoji(text: str) -> bool:
    for ch in text:
        code = ord(ch)
        if any(low <= code <= high for low, high in _EMOJI_RANGES):
            return True
    return False


def parse_iso_date(text: str) -> date | None:
    """Parse strict ``YYYY-MM-DD``; None when malformed or not a calendar day."""
    match = _ISO_DATE.match(text)
    if match is None:
        return None
    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return None


def parse_rfc3339(text: str) -> datetime | None:
    """Parse an RFC 3339 timestamp and normalise it to UTC.

    Seconds and fractional seconds are optional. A timestamp without an
    offset is taken as UTC.
    """
    match = _RFC3339.match(text)
    if match is None:
        return None
    year, month, day, hour, minute, second, fraction, offset = match.groups()
    micros = int((fraction or "0")[:6].ljust(6, "0"))
    try:
        parsed = datetime(
            int(year), int(month), int(day), int(hour), int(minute), int(second or 0), micros,
            tzinfo=timezone.utc,
        )
    except ValueError:
        return None
    if offset and offset not in ("Z", "z"):
        sign = -1 if offset[0] == "-" else 1
        digits = offset[1:].replace(":", "")
        hours, minutes = int(digits[:2]), int(digits[2:])
        if hours > 23 or minutes > 59:
            return None
        parsed -= sign * timedelta(hours=hours, minutes=minutes)
    return parsed
