from __future__ import annotations

"""
Scanner configuration: which rules are enabled and how report files are selected.

Everything the CLI can override lives here: the report extension, whether
to descend into subdirectories, the text encoding of listings, and the
debug switch that keeps non-differing blocks and per-line traces.
"""

from dataclasses import dataclass, field

from cmpscan.rules.ruleset import RuleSet, default_ruleset

DEFAULT_EXTENSION = ".lst"


@dataclass
class Config:
    """
    Scanner configuration.

    debug=False (the default) reports only blocks with differences and drops
    intermediate values; debug=True reports every block with its trace.
    """

    rules: RuleSet = field(default_factory=default_ruleset)
    extension: str = DEFAULT_EXTENSION
    recursive: bool = False
    debug: bool = False
    encoding: str = "utf-8"

    def __post_init__(self) -> None:
        ext = self.extension.strip()
        if not ext:
            raise ValueError("Report extension must not be empty")
        if not ext.startswith("."):
            ext = "." + ext
        self.extension = ext.lower()


def get_default_config() -> Config:
    """
    Return the default configuration with all built-in diagnostic rules.

    This is what the CLI in main.py starts from before applying its flags.
    """
    return Config()


def get_enabled_rules(config: Config | None = None) -> RuleSet:
    """Return the rule table from the given config (or default config)."""
    if config is None:
        config = get_default_config()
    return config.rules
