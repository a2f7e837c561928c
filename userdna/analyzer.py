"""Analysis pipeline for userdna.

select recent → flatten → extract patterns → assemble result. Pure:
every call builds its result from scratch and never touches its input.
"""

import logging

from .constants import RECENT_FRACTION
from .conversations import select_recent, flatten_messages
from .patterns import (
    analyze_code_style,
    analyze_projects,
    analyze_instructions,
    analyze_triggers,
    analyze_tone,
)

logger = logging.getLogger(__name__)


def analyze(conversations: list[dict], fraction: float = RECENT_FRACTION) -> dict:
    """Build the profile analysis for a conversation export.

    Returns a JSON-compatible dict with ``tone``, ``code_styles``,
    ``projects``, ``instructions``, ``triggers`` and ``stats``.
    """
    recent = select_recent(conversations, fraction)
    logger.info(f"Analyzing {len(recent)} of {len(conversations)} conversations "
                f"({fraction:.0%} most recent)")

    turns = flatten_messages(recent)
    logger.info(f"Extracted {len(turns)} messages")

    return {
        "tone": analyze_tone(turns),
        "code_styles": analyze_code_style(turns),
        "projects": analyze_projects(turns),
        "instructions": analyze_instructions(turns),
        "triggers": analyze_triggers(turns),
        "stats": {
            "total_conversations": len(conversations),
            "analyzed_conversations": len(recent),
            "total_messages": len(turns),
        },
    }
