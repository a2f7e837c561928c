"""Configuration for userdna.

Reads from ~/.userdna/config.json with sensible defaults.
"""

import json
from pathlib import Path

from .constants import RECENT_FRACTION, TOKEN_BUDGET


DEFAULT_CONFIG_PATH = Path.home() / ".userdna" / "config.json"

DEFAULTS = {
    # Analysis
    "sample_fraction": RECENT_FRACTION,  # most recent share of conversations analyzed
    "token_budget": TOKEN_BUDGET,        # advisory; exceeding it only warns

    # Output
    "output_dir": ".",
    "output_basename": "user_dna_profile",
    "default_format": "markdown",  # or "json"

    # Logging
    "log_dir": str(Path.home() / ".userdna"),

    # Guidelines endpoint
    "guidelines_port": 3000,
    "guidelines_max_chars": 3000,
    "fetch_timeout": 30,
}


class Config:
    def __init__(self, config_path: Path = DEFAULT_CONFIG_PATH):
        self.config_path = Path(config_path)
        self._data = dict(DEFAULTS)
        self._load()

    def _load(self):
        if not self.config_path.exists():
            return
        with open(self.config_path, encoding="utf-8") as f:
            user_config = json.load(f)
        if not isinstance(user_config, dict):
            raise ValueError(f"Config file must hold a JSON object: {self.config_path}")
        self._data.update(user_config)

    def __getitem__(self, key):
        return self._data[key]

    @property
    def log_dir(self) -> Path:
        return Path(self._data["log_dir"]).expanduser()

    def output_path(self, fmt: str) -> Path:
        """Where the rendered profile is written for the given format."""
        ext = "json" if fmt == "json" else "md"
        out_dir = Path(self._data["output_dir"]).expanduser()
        return out_dir / f"{self._data['output_basename']}.{ext}"
