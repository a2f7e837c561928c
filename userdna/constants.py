"""Shared constants for userdna.

Keyword tables are ordered ``(label, keywords)`` pairs. Their order breaks
ranking ties, so entries earlier in a table win when counts are equal.
"""

# ── Sampling / budget ─────────────────────────────────────────

RECENT_FRACTION = 0.2
TOKEN_BUDGET = 2000

# ── Code style ────────────────────────────────────────────────

LANGUAGE_KEYWORDS = [
    ("python", ("python", "pip", "django", "flask", "pandas")),
    ("javascript", ("javascript", "js", "node.js", "npm", "react", "vue")),
    ("typescript", ("typescript", "ts", "tsx")),
    ("java", ("java", "spring", "maven", "gradle")),
    ("go", ("golang", "go ")),
    ("rust", ("rust", "cargo")),
    ("cpp", ("c++", "cpp")),
    ("csharp", ("c#", "csharp", ".net", "dotnet")),
]

ARCHITECTURE_MARKERS = [
    ("functional programming", ("functional", "pure function")),
    ("object-oriented", ("oop", "object-oriented")),
    ("microservices", ("microservice",)),
    ("REST API", ("rest", "restful")),
]

NAMING_MARKERS = [
    ("camelCase", ("camelcase", "camel case")),
    ("snake_case", ("snake_case", "snake case")),
    ("kebab-case", ("kebab-case", "kebab case")),
]

# ── Projects ──────────────────────────────────────────────────

# A bundle is flagged when ANY of its keywords is present
TECH_STACK_KEYWORDS = [
    ("Node.js + Express", ("node", "express")),
    ("React", ("react", "jsx")),
    ("Vue.js", ("vue",)),
    ("Python + Flask", ("python", "flask")),
    ("Python + Django", ("python", "django")),
    ("MongoDB", ("mongodb", "mongo")),
    ("PostgreSQL", ("postgresql", "postgres")),
    ("Docker", ("docker", "container")),
    ("AWS", ("aws", "amazon web services")),
    ("Firebase", ("firebase",)),
]

PROJECT_NAME_MIN_LEN = 4
PROJECT_NAME_MAX_LEN = 30

# ── Instructions ──────────────────────────────────────────────

INSTRUCTION_KEYWORDS = (
    "no fluff", "tight", "concise", "brief",
    "bold", "edgy", "direct",
    "always", "never", "must", "should",
    "prefer", "avoid", "use",
)

RULE_MARKERS = ("rule:", "core rule")
RULE_SENTENCE_MIN_LEN = 15
RULE_SENTENCE_MAX_LEN = 150
RULE_EXCERPT_LEN = 200

# ── Tone ──────────────────────────────────────────────────────

CASUAL_MARKERS = ("hey", "yo", "sup", "dude", "bro", "lol", "haha")
FORMAL_MARKERS = ("please", "kindly", "appreciate", "regarding", "furthermore")

TONE_CASUAL = "casual/direct"
TONE_FORMAL = "formal/professional"
TONE_BALANCED = "balanced/professional"

# ── Ranking caps ──────────────────────────────────────────────

MAX_LANGUAGES = 5
MAX_PROJECT_NAMES = 10
MAX_TECH_STACKS = 8
MAX_INSTRUCTIONS = 15
MAX_RENDERED_RULES = 10
MAX_EMOJIS = 10
MAX_HASHTAGS = 10
