"""Approximate token counting for rendered profiles.

Words are weighted 1.3 to account for subword splits, and Markdown
structure (heading markers, code fences, bold/italic markers, quote
markers, paragraph breaks) adds one token per occurrence.
"""

import logging
import math
import re

from .constants import TOKEN_BUDGET

logger = logging.getLogger(__name__)

_SPECIAL_TOKEN_RE = re.compile(r"#+\s|```|\*\*|__|>\s|\n\n")


def estimate_tokens(text: str) -> int:
    words = text.split()
    special = len(_SPECIAL_TOKEN_RE.findall(text))
    return math.ceil(len(words) * 1.3) + special


def check_budget(text: str, budget: int = TOKEN_BUDGET) -> tuple[int, bool]:
    """Estimate tokens and compare against the budget.

    Advisory only: going over logs a warning and nothing is cut.
    """
    tokens = estimate_tokens(text)
    within = tokens <= budget
    if not within:
        logger.warning(f"Output exceeds {budget} token limit ({tokens} estimated). "
                       f"Consider filtering more data.")
    return tokens, within
