from __future__ import annotations

import re

_ARABIC = re.compile("[\u0600-\u06ff]")

RTL_THRESHOLD = 0.2


def is_right_to_left(text: str | None) -> bool:
    """True when more than a fifth of the text is Arabic script."""
    if not text:
        return False
    return len(_ARABIC.findall(text)) > len(text) * RTL_THRESHOLD
