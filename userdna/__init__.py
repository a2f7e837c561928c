"""userdna: heuristic User DNA Profiles from ChatGPT conversation exports.

Samples the most recently active conversations, flattens their message
trees, runs keyword/regex extractors over the turns and renders a compact
profile sized for a model's personal-context budget.

    from userdna import load_conversations, analyze, render, estimate_tokens

    result = analyze(load_conversations("conversations.json"))
    text = render(result, "markdown")
    estimate_tokens(text)
"""

from .analyzer import analyze
from .conversations import load_conversations
from .report import render
from .tokens import estimate_tokens

__all__ = ["analyze", "render", "estimate_tokens", "load_conversations"]
