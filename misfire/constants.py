"""
misfire.constants — Shared Constants & Helpers
===============================================

Single source of truth for default UI strings, component custom IDs and
Discord limits.  Import from here instead of duplicating in cogs.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Discord limits
# ---------------------------------------------------------------------------
DISCORD_MESSAGE_LIMIT = 2000  # Unicode code points per message

# ---------------------------------------------------------------------------
# Persistent component IDs (must stay stable across restarts)
# ---------------------------------------------------------------------------
DISMISS_BUTTON_ID = "misfire:dismiss"
PURGE_BUTTON_ID = "misfire:purge"

# ---------------------------------------------------------------------------
# Default UI strings (overridable from config.yaml)
# ---------------------------------------------------------------------------
DEFAULT_ACTIVITY_TEXT = "people in VC"
DEFAULT_WARNING_TEXT = (
    "⚠️ Heads up: you're in a voice channel, but this isn't its "
    "text channel. Did you mean to post here?"
)
DEFAULT_DISMISS_LABEL = "It's fine (remove warning)"
DEFAULT_PURGE_LABEL = "Oops (delete both)"
DEFAULT_PURGE_DENIED_TEXT = "Only the person who posted can do this."

STATUS_TRUNCATED_NOTICE = "… (truncated, full dump is in the bot log)"


def fit_to_limit(text: str, limit: int, notice: str = STATUS_TRUNCATED_NOTICE) -> tuple[str, bool]:
    """Cut *text* at a line boundary so it fits in *limit* code points.

    Returns ``(text, truncated)``.  When truncated, *notice* is appended on
    its own line and the result still fits.  If not even the notice fits,
    the notice itself is hard-cut.
    """
    if len(text) <= limit:
        return text, False

    budget = limit - len(notice) - 1  # newline before the notice
    if budget <= 0:
        return notice[:limit], True

    kept: list[str] = []
    used = 0
    for line in text.split("\n"):
        cost = len(line) + (1 if kept else 0)
        if used + cost > budget:
            break
        kept.append(line)
        used += cost

    if not kept:
        return notice, True
    return "\n".join(kept) + "\n" + notice, True
