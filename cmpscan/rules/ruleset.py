# Ordered rule table: evaluates diagnostic rules against one line with first-match-wins semantics.

from __future__ import annotations

import logging
from typing import Iterator, Optional, Sequence

from cmpscan.rules.base import Rule, RuleMatch
from cmpscan.rules.diagnostics import build_default_rules, rule_ids

logger = logging.getLogger(__name__)


class RuleSet:
    """
    An ordered, stateless table of diagnostic rules.

    At most one rule fires per line: rules are tried in order and the first
    one whose phrases all occur in the line decides the new flag.
    """

    def __init__(self, rules: Sequence[Rule]) -> None:
        ids = rule_ids(rules)
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise ValueError(f"Duplicate rule ids: {', '.join(duplicates)}")
        self._rules = tuple(rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def match(self, line: str, current_flag: bool = False) -> Optional[RuleMatch]:
        """Return the first rule's match for line, or None if no rule fires."""
        for rule in self._rules:
            if rule.matches(line):
                result = rule.apply(line, current_flag)
                logger.debug(
                    "Rule %s fired: value=%s flag=%s", result.rule_id, result.value, result.flag
                )
                return result
        return None

    def evaluate(self, line: str, current_flag: bool) -> bool:
        """Return the block's flag after line; unchanged when no rule fires."""
        result = self.match(line, current_flag)
        if result is None:
            return current_flag
        return result.flag


def default_ruleset() -> RuleSet:
    """Return a RuleSet with the built-in PROC COMPARE diagnostics."""
    return RuleSet(build_default_rules())
