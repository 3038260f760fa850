# Rule interface (abstract base class): defines the contract all diagnostic rules implement.
# Concrete rules (CountRule, PresenceRule) match a line by its required phrases and
# decide how the block's "has differences" flag changes when they fire.

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Sequence


@dataclass(frozen=True)
class RuleMatch:
    """The outcome of one rule firing on one line."""

    rule_id: str
    value: Optional[int]
    flag: bool


class Rule(ABC):
    """
    Abstract base class for all diagnostic rules.

    Subclasses must define:
    - id: str — unique rule identifier (e.g. "values-unequal")
    - name: str — human-readable rule name
    - phrases: Sequence[str] — substrings that must all appear in a line
    - apply(line, current_flag) -> RuleMatch — compute the new flag for a matched line

    The RuleSet calls matches() for each rule in order and apply() on the first
    rule that matches; no other rule sees that line.
    """

    id: str
    name: str
    phrases: Sequence[str]

    def matches(self, line: str) -> bool:
        """Return True if every required phrase occurs in the line (case-sensitive)."""
        return all(phrase in line for phrase in self.phrases)

    @abstractmethod
    def apply(self, line: str, current_flag: bool) -> RuleMatch:
        """
        Compute the flag after this rule fires on line.

        Args:
            line: The raw listing line; matches(line) is already known to be True.
            current_flag: The block's flag before this line.

        Returns:
            RuleMatch with the extracted value (if any) and the updated flag.
        """
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r})"
