# Diagnostic rules for PROC COMPARE listings: count summaries and unconditional difference notes.

from __future__ import annotations

from typing import List, Sequence

from cmpscan.parser import extract_trailing_number
from cmpscan.rules.base import Rule, RuleMatch


class CountRule(Rule):
    """
    A summary line ending in a count, e.g.
    "Total Number of Values which Compare Unequal: 12".

    The block differs if the rightmost number on the line is positive. A line
    whose last token is not numeric leaves the flag unchanged.
    """

    def __init__(self, rule_id: str, name: str, *phrases: str) -> None:
        self.id = rule_id
        self.name = name
        self.phrases = phrases

    def apply(self, line: str, current_flag: bool) -> RuleMatch:
        value = extract_trailing_number(line)
        positive = value is not None and value > 0
        return RuleMatch(rule_id=self.id, value=value, flag=current_flag or positive)


class PresenceRule(Rule):
    """A note whose mere presence means the datasets differ."""

    def __init__(self, rule_id: str, name: str, *phrases: str) -> None:
        self.id = rule_id
        self.name = name
        self.phrases = phrases

    def apply(self, line: str, current_flag: bool) -> RuleMatch:
        return RuleMatch(rule_id=self.id, value=None, flag=True)


def build_default_rules() -> List[Rule]:
    """Return the diagnostic rules in evaluation order (first match wins)."""
    return [
        CountRule(
            "variables-not-in",
            "Variables in one dataset but not the other",
            "Number of Variables in",
            "but not in",
        ),
        CountRule(
            "observations-not-in",
            "Observations in one dataset but not the other",
            "Number of Observations in",
            "but not in",
        ),
        CountRule(
            "obs-some-unequal",
            "Observations with some compared variables unequal",
            "Number of Observations with Some Compared Variables Unequal:",
        ),
        CountRule(
            "obs-all-unequal",
            "Observations with all compared variables unequal",
            "Number of Observations with All Compared Variables Unequal:",
        ),
        CountRule(
            "vars-some-unequal",
            "Variables compared with some observations unequal",
            "Number of Variables Compared with Some Observations Unequal:",
        ),
        CountRule(
            "vars-all-unequal",
            "Variables compared with all observations unequal",
            "Number of Variables Compared with All Observations Unequal:",
        ),
        PresenceRule(
            "all-values-unequal",
            "All compared variables have unequal values",
            "All Variables Compared have Unequal Values",
        ),
        PresenceRule(
            "no-common-variables",
            "Datasets have no variables in common",
            "have no variables in common",
            "There are no matching variables to compare",
        ),
        CountRule(
            "conflicting-types",
            "Variables with conflicting types",
            "Number of Variables with Conflicting Types:",
        ),
        CountRule(
            "differing-attributes",
            "Variables with differing attributes",
            "Number of Variables with Differing Attributes:",
        ),
        CountRule(
            "values-unequal",
            "Values which compare unequal",
            "Total Number of Values which Compare Unequal:",
        ),
    ]


def rule_ids(rules: Sequence[Rule]) -> List[str]:
    """Return the ids of rules, preserving order."""
    return [rule.id for rule in rules]
