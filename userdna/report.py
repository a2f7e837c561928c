"""Profile rendering for userdna.

Two forms of the same analysis result: indented JSON that keeps every
field, and a Markdown "User DNA Profile" with a fixed section order.
Languages and architecture always render (with a placeholder when
empty); the other optional sections are left out entirely.
"""

import json

from .constants import MAX_RENDERED_RULES

FORMATS = ("markdown", "json")

_STYLE_DESCRIPTION = "Direct, efficiency-focused"


def _camel(key: str) -> str:
    head, *rest = key.split("_")
    return head + "".join(word.capitalize() for word in rest)


def _camel_keys(value):
    if isinstance(value, dict):
        return {_camel(k): _camel_keys(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_camel_keys(v) for v in value]
    return value


def render_json(result: dict) -> str:
    """Serialize a result with camelCase keys (``codeStyles``, ``techStacks``)."""
    return json.dumps(_camel_keys(result), indent=2, ensure_ascii=False)


def _bullets(items) -> list[str]:
    return [f"- {item}" for item in items]


def render_markdown(result: dict) -> str:
    """Render the analysis result as a Markdown profile."""
    code = result["code_styles"]
    projects = result["projects"]
    rules = result["instructions"]
    triggers = result["triggers"]
    stats = result["stats"]

    lines = [
        "# User DNA Profile",
        "",
        f"> Generated from {stats['analyzed_conversations']} conversations "
        f"({stats['total_messages']} messages)",
        "",
        "## Core Identity",
        "",
        f"**Tone:** {result['tone']}",
        "",
        f"**Communication Style:** {_STYLE_DESCRIPTION}",
        "",
        "## Technical Blueprint",
        "",
        "### Preferred Languages",
        *(_bullets(code["languages"]) or ["- (No language preferences detected)"]),
        "",
        "### Architectural Patterns",
        *(_bullets(code["architecture"]) or ["- (No clear patterns detected)"]),
        "",
    ]

    if code["naming"]:
        lines += ["### Naming Conventions", *_bullets(code["naming"]), ""]

    if projects["names"]:
        lines += ["## Project Catalog", ""]
        lines += [f"- **{p['name']}** ({p['mentions']} mentions)" for p in projects["names"]]
        lines.append("")

    if projects["tech_stacks"]:
        lines += ["### Tech Stack", *_bullets(projects["tech_stacks"]), ""]

    if rules:
        lines += ["## Personal Heuristics", "", "### Core Rules"]
        lines += [f"{i}. {rule}" for i, rule in enumerate(rules[:MAX_RENDERED_RULES], 1)]
        lines.append("")

    if triggers["emojis"] or triggers["hashtags"]:
        lines += ["## Workflow Triggers", ""]
        if triggers["emojis"]:
            lines.append("### Common Emojis")
            lines += [f"- {e['emoji']} ({e['count']} uses)" for e in triggers["emojis"]]
            lines.append("")
        if triggers["hashtags"]:
            lines.append("### Hashtags")
            lines += [f"- {h['tag']} ({h['count']} uses)" for h in triggers["hashtags"]]
            lines.append("")

    return "\n".join(lines) + "\n"


def render(result: dict, fmt: str = "markdown") -> str:
    """Render the result in the requested format ("markdown" or "json")."""
    if fmt == "json":
        return render_json(result)
    if fmt == "markdown":
        return render_markdown(result)
    raise ValueError(f"Unknown format: {fmt}")
