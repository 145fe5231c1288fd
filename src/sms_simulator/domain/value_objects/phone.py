"""Phone number canonicalization shared by every view of a device."""
from __future__ import annotations

import re

from sms_simulator.domain.value_objects.ids import DeviceKey

DEFAULT_COUNTRY_CODE = "249"

_SEPARATORS = re.compile(r"[\s-]")
_LOCAL_NUMBER = re.compile(r"^\d{10,}$")


def normalize_phone(raw: str, country_code: str = DEFAULT_COUNTRY_CODE) -> DeviceKey:
    """Return the canonical device key for a user-entered phone string.

    ``"0912345678"`` and ``"249912345678"`` both become ``"+249912345678"``.
    Anything that is not a plain run of digits (already ``+`` prefixed,
    letters, too short) passes through with only separators removed.
    """
    normalized = _SEPARATORS.sub("", raw or "")

    if _LOCAL_NUMBER.match(normalized) and not normalized.startswith(country_code):
        if normalized.startswith("0"):
            normalized = normalized[1:]
        normalized = f"+{country_code}{normalized}"

    if re.fullmatch(rf"{re.escape(country_code)}\d+", normalized):
        normalized = f"+{normalized}"

    return DeviceKey(normalized)


def device_label(key: str) -> str:
    if not key or len(key) < 4:
        return "Phone"
    return f"Phone ...{key[-4:]}"
