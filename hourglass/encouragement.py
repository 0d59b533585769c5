"""Short messages shown when an interval ends.

Focus messages can be customised in ``MESSAGES.md`` at the project root
(one ``- bullet`` per message). Break and long-break messages are built in.
"""

from __future__ import annotations

import random
from pathlib import Path

_FALLBACK_FOCUS_MESSAGES: list[str] = [
    "Focus block done. Nice work.",
    "That one counts. Time to breathe.",
    "Another interval in the bag.",
    "You stayed with it. Step away for a moment.",
    "Progress does not have to be perfect to count.",
]

_BREAK_OVER_MESSAGES: list[str] = [
    "Break is over. Ease back in.",
    "Ready for the next block?",
    "Pick one small thing to start with.",
]

_LONG_BREAK_MESSAGES: list[str] = [
    "Four blocks done. Take a proper rest.",
    "Long break earned. Get up, stretch, get some water.",
    "Look at something far away for a while. You have earned it.",
]


def _load_focus_messages(md_path: Path | None = None) -> list[str]:
    """Parse bullet points from MESSAGES.md, falling back to built-in list."""
    if md_path is None:
        md_path = Path(__file__).resolve().parent.parent / "MESSAGES.md"
    if not md_path.exists():
        return _FALLBACK_FOCUS_MESSAGES

    messages: list[str] = []
    for line in md_path.read_text(encoding="utf-8").splitlines():
        stripped = line.strip()
        if stripped.startswith("- "):
            msg = stripped[2:].strip()
            if msg:
                messages.append(msg)
    return messages if messages else _FALLBACK_FOCUS_MESSAGES


_FOCUS_MESSAGES: list[str] = _load_focus_messages()


def focus_done_message(long_break_next: bool = False) -> str:
    """Message for the end of a focus interval."""
    if long_break_next:
        return random.choice(_LONG_BREAK_MESSAGES)
    return random.choice(_FOCUS_MESSAGES)


def break_over_message() -> str:
    return random.choice(_BREAK_OVER_MESSAGES)
