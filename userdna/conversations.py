"""Conversation export handling for userdna.

Loads a ChatGPT-style ``conversations.json`` export, picks the most
recently active conversations, and flattens each conversation's message
tree into plain authored turns. No scoring happens here.
"""

import json
import logging
import math
from pathlib import Path

from .constants import RECENT_FRACTION

logger = logging.getLogger(__name__)


# ── Load ─────────────────────────────────────────────────────

def load_conversations(path: Path) -> list[dict]:
    """Load the conversation list from an export file.

    Accepts either a bare JSON array of conversations or an object with a
    ``conversations`` array. Raises ValueError for any other shape;
    OSError and json.JSONDecodeError propagate unchanged.
    """
    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    if isinstance(data, list):
        conversations = data
    elif isinstance(data, dict):
        conversations = data.get("conversations")
        if not isinstance(conversations, list):
            raise ValueError("Export object has no 'conversations' array")
    else:
        raise ValueError(f"Expected a JSON array or object, got {type(data).__name__}")

    logger.info(f"Loaded {len(conversations)} conversations from {path}")
    return conversations


# ── Select ───────────────────────────────────────────────────

def _activity_time(conversation: dict) -> float:
    """Most recent activity timestamp, 0 when unknown."""
    if not isinstance(conversation, dict):
        return 0.0
    raw = conversation.get("update_time") or conversation.get("create_time") or 0
    try:
        return float(raw)
    except (TypeError, ValueError):
        logger.debug(f"Ignoring non-numeric timestamp {raw!r} on {conversation.get('id')}")
        return 0.0


def select_recent(conversations: list[dict], fraction: float = RECENT_FRACTION) -> list[dict]:
    """Return the most recently active share of conversations, newest first.

    Always keeps at least one conversation when any exist. The sort is
    stable, so conversations with equal activity keep their input order.
    """
    ordered = sorted(conversations, key=_activity_time, reverse=True)
    keep = max(1, math.ceil(len(ordered) * fraction))
    return ordered[:keep]


# ── Flatten ──────────────────────────────────────────────────

def _node_text(message: dict) -> str:
    content = message.get("content")
    if not isinstance(content, dict):
        return ""
    parts = content.get("parts")
    if not isinstance(parts, list):
        return ""
    # Non-string parts are attachments or asset pointers
    return " ".join(p for p in parts if isinstance(p, str)).strip()


def _node_role(message: dict) -> str | None:
    author = message.get("author")
    if not isinstance(author, dict):
        return None
    return author.get("role") or None


def flatten_messages(conversations: list[dict]) -> list[dict]:
    """Flatten every conversation's message mapping into turns.

    One turn per node that has an author role and non-empty text, grouped
    by conversation in the given order. Within a conversation, turns follow
    the mapping's key order; use ``timestamp`` when chronology matters.
    """
    turns = []
    skipped = 0

    for conv in conversations:
        if not isinstance(conv, dict):
            continue
        mapping = conv.get("mapping")
        if not isinstance(mapping, dict):
            continue

        for node in mapping.values():
            message = node.get("message") if isinstance(node, dict) else None
            if not isinstance(message, dict) or not message.get("content"):
                skipped += 1
                continue

            text = _node_text(message)
            role = _node_role(message)
            if not text or not role:
                skipped += 1
                continue

            turns.append({
                "role": role,
                "text": text,
                "timestamp": message.get("create_time"),
                "conversation_id": conv.get("id"),
                "conversation_title": conv.get("title"),
            })

    if skipped:
        logger.debug(f"Skipped {skipped} nodes without author or text")
    return turns


def user_turns(turns: list[dict]) -> list[dict]:
    return [t for t in turns if t["role"] == "user"]
