"""Keyword and regex pattern extraction for userdna.

Four independent extractors plus a tone classifier. Each takes the
flattened turn list and returns its own slice of the analysis result;
none of them share state. All matching is substring or regex based,
there is no language understanding here.
"""

import re
from collections import Counter

from .constants import (
    LANGUAGE_KEYWORDS, ARCHITECTURE_MARKERS, NAMING_MARKERS,
    TECH_STACK_KEYWORDS, PROJECT_NAME_MIN_LEN, PROJECT_NAME_MAX_LEN,
    INSTRUCTION_KEYWORDS, RULE_MARKERS, RULE_SENTENCE_MIN_LEN,
    RULE_SENTENCE_MAX_LEN, RULE_EXCERPT_LEN,
    CASUAL_MARKERS, FORMAL_MARKERS, TONE_CASUAL, TONE_FORMAL, TONE_BALANCED,
    MAX_LANGUAGES, MAX_PROJECT_NAMES, MAX_TECH_STACKS, MAX_INSTRUCTIONS,
    MAX_EMOJIS, MAX_HASHTAGS,
)
from .conversations import user_turns

# Word boundaries are ASCII-only: an accented letter next to a marker
# still counts as a boundary.
_NOT_WORD_BEFORE = r"(?<![A-Za-z0-9_])"
_NOT_WORD_AFTER = r"(?![A-Za-z0-9_])"

_PROJECT_NAME_RE = re.compile(
    _NOT_WORD_BEFORE + r"[A-Z]{3,}(?:\s+[A-Z]{3,})*" + _NOT_WORD_AFTER
)
_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
_EMOJI_RE = re.compile("[\U0001F300-\U0001F9FF\u2600-\u26FF\u2700-\u27BF]")
_HASHTAG_RE = re.compile(r"#\w+", re.ASCII)


def _marker_re(markers: tuple[str, ...]) -> re.Pattern:
    alternation = "|".join(re.escape(m) for m in markers)
    return re.compile(f"{_NOT_WORD_BEFORE}(?:{alternation}){_NOT_WORD_AFTER}")


_CASUAL_RE = _marker_re(CASUAL_MARKERS)
_FORMAL_RE = _marker_re(FORMAL_MARKERS)


# ── Helpers ──────────────────────────────────────────────────

def _contains_any(text: str, keywords) -> bool:
    return any(kw in text for kw in keywords)


def _rank_by_table(tally: Counter, table: list, limit: int) -> list[tuple[str, int]]:
    """Rank tallied labels by count; equal counts keep keyword-table order."""
    ordered = Counter({label: tally[label] for label, _ in table if tally[label]})
    return ordered.most_common(limit)


# ── Code style ───────────────────────────────────────────────

def analyze_code_style(turns: list[dict]) -> dict:
    """Detect languages, architecture patterns and naming conventions.

    Looks at every turn regardless of role. Languages are tallied at most
    once per turn; architecture and naming are recorded on first sight.
    """
    languages = Counter()
    architecture = {}
    naming = {}

    for turn in turns:
        text = turn["text"].lower()

        for lang, keywords in LANGUAGE_KEYWORDS:
            if _contains_any(text, keywords):
                languages[lang] += 1

        for label, markers in ARCHITECTURE_MARKERS:
            if _contains_any(text, markers):
                architecture.setdefault(label, None)

        for label, markers in NAMING_MARKERS:
            if _contains_any(text, markers):
                naming.setdefault(label, None)

    return {
        "languages": [lang for lang, _ in _rank_by_table(languages, LANGUAGE_KEYWORDS, MAX_LANGUAGES)],
        "naming": list(naming),
        "architecture": list(architecture),
    }


# ── Projects ─────────────────────────────────────────────────

def analyze_projects(turns: list[dict]) -> dict:
    """Find ALL-CAPS project names and tech stacks in user turns."""
    projects = Counter()
    stacks = Counter()

    for turn in user_turns(turns):
        text = turn["text"]

        for match in _PROJECT_NAME_RE.findall(text):
            if PROJECT_NAME_MIN_LEN <= len(match) <= PROJECT_NAME_MAX_LEN:
                projects[match] += 1

        lower = text.lower()
        for stack, keywords in TECH_STACK_KEYWORDS:
            if _contains_any(lower, keywords):
                stacks[stack] += 1

    return {
        "names": [
            {"name": name, "mentions": count}
            for name, count in projects.most_common(MAX_PROJECT_NAMES)
        ],
        "tech_stacks": [
            stack for stack, _ in _rank_by_table(stacks, TECH_STACK_KEYWORDS, MAX_TECH_STACKS)
        ],
    }


# ── Instructions ─────────────────────────────────────────────

def analyze_instructions(turns: list[dict]) -> list[str]:
    """Collect sentences from user turns that read like standing rules.

    A sentence qualifies when it contains an instruction keyword and its
    untrimmed length is strictly between the sentence bounds. Turns that
    declare a rule outright ("rule:", "core rule") contribute their opening
    excerpt whatever its length.
    """
    rules = []

    for turn in user_turns(turns):
        text = turn["text"]

        for sentence in _SENTENCE_SPLIT_RE.split(text):
            if not _contains_any(sentence.strip().lower(), INSTRUCTION_KEYWORDS):
                continue
            if RULE_SENTENCE_MIN_LEN < len(sentence) < RULE_SENTENCE_MAX_LEN:
                rules.append(sentence.strip())

        if _contains_any(text.lower(), RULE_MARKERS):
            rules.append(text[:RULE_EXCERPT_LEN])

    return list(dict.fromkeys(rules))[:MAX_INSTRUCTIONS]


# ── Workflow triggers ────────────────────────────────────────

def analyze_triggers(turns: list[dict]) -> dict:
    """Tally emojis and hashtags used in user turns."""
    emojis = Counter()
    hashtags = Counter()

    for turn in user_turns(turns):
        text = turn["text"]
        emojis.update(_EMOJI_RE.findall(text))
        hashtags.update(_HASHTAG_RE.findall(text))

    return {
        "emojis": [
            {"emoji": emoji, "count": count}
            for emoji, count in emojis.most_common(MAX_EMOJIS)
        ],
        "hashtags": [
            {"tag": tag, "count": count}
            for tag, count in hashtags.most_common(MAX_HASHTAGS)
        ],
    }


# ── Tone ─────────────────────────────────────────────────────

def analyze_tone(turns: list[dict]) -> str:
    """Classify user tone from casual vs formal marker counts.

    Each turn counts at most once per side. One side must outnumber the
    other more than twofold to win; anything closer is balanced.
    """
    casual = 0
    formal = 0

    for turn in user_turns(turns):
        lower = turn["text"].lower()
        if _CASUAL_RE.search(lower):
            casual += 1
        if _FORMAL_RE.search(lower):
            formal += 1

    if casual > formal * 2:
        return TONE_CASUAL
    if formal > casual * 2:
        return TONE_FORMAL
    return TONE_BALANCED
