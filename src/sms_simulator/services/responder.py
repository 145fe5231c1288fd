"""Canned replies for the mock backend.

Only recognises the handful of keywords the simulator's quick buttons
send; anything else gets the help hint.
"""
from __future__ import annotations

HELP_TEXT = (
    "Commands: REG MOTHER CAMP <camp> ZONE <zone> to register, "
    "EMERGENCY for urgent help, HELP for this list."
)


def reply_to(body: str) -> str:
    words = body.strip().upper().split()
    if not words:
        return HELP_TEXT

    keyword = words[0]
    if keyword == "HELP":
        return HELP_TEXT
    if keyword == "EMERGENCY":
        return "Emergency received. A volunteer is being contacted now. Stay where you are."
    if keyword == "REG":
        if len(words) >= 2 and words[1] == "MOTHER":
            return "Registered as mother. Reply EMERGENCY at any time for help."
        return "Registration format: REG MOTHER CAMP <camp> ZONE <zone>"
    return "Unknown command. Reply HELP for options."
