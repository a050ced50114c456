"""
Chunk matcher rules.

A rule is a tagged variant: literal equality, regular-expression search, or
a predicate over the chunk identity. Rule sets accept a single rule or a list
and match when any rule matches.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable, Mapping, Optional, Pattern, Tuple, Union

from nativepack_core.exceptions import ValidationError


class RuleKind(str, Enum):
    """Rule variants."""

    LITERAL = "literal"
    PATTERN = "pattern"
    PREDICATE = "predicate"


@dataclass(frozen=True)
class Rule:
    """
    Single matcher rule.

    Attributes:
        kind: Which test to apply
        value: The literal string, compiled pattern, or predicate
    """

    kind: RuleKind
    value: Any

    @classmethod
    def literal(cls, value: str) -> "Rule":
        return cls(RuleKind.LITERAL, value)

    @classmethod
    def pattern(cls, value: Union[str, Pattern[str]]) -> "Rule":
        try:
            compiled = value if isinstance(value, re.Pattern) else re.compile(value)
        except re.error as e:
            raise ValidationError(
                f"Invalid chunk pattern {value!r}: {e}",
                error_code="VAL_003",
                original_exception=e,
            ) from e
        return cls(RuleKind.PATTERN, compiled)

    @classmethod
    def predicate(cls, value: Callable[[str], bool]) -> "Rule":
        return cls(RuleKind.PREDICATE, value)

    @classmethod
    def coerce(cls, value: Any) -> "Rule":
        """
        Turn a user-supplied value into a Rule.

        Accepts a Rule, a string (literal), a compiled regex (pattern),
        a mapping ``{"literal": ...}`` / ``{"pattern": ...}`` as found in
        JSON config, or a callable (predicate).

        Raises:
            ValidationError: If the value is none of the above
        """
        if isinstance(value, Rule):
            return value
        if isinstance(value, str):
            return cls.literal(value)
        if isinstance(value, re.Pattern):
            return cls.pattern(value)
        if isinstance(value, Mapping) and len(value) == 1:
            key, inner = next(iter(value.items()))
            if key == RuleKind.LITERAL.value and isinstance(inner, str):
                return cls.literal(inner)
            if key == RuleKind.PATTERN.value and isinstance(inner, str):
                return cls.pattern(inner)
        if callable(value):
            return cls.predicate(value)

        raise ValidationError(
            f"Unsupported chunk rule: {value!r}",
            error_code="VAL_003",
            details={"rule": repr(value)},
        )


def rule_matches(rule: Rule, identity: Optional[str]) -> bool:
    """Evaluate one rule. A missing identity never matches."""
    if identity is None:
        return False
    if rule.kind is RuleKind.LITERAL:
        return identity == rule.value
    if rule.kind is RuleKind.PATTERN:
        return rule.value.search(identity) is not None
    return bool(rule.value(identity))


class RuleSet:
    """
    Ordered ``include`` rules. Matching is order-independent.

    Example:
        >>> rules = RuleSet.of(["settings", re.compile(r"^locale-")])
        >>> rules.matches("locale-en")
        True
    """

    __slots__ = ("include",)

    def __init__(self, include: Iterable[Rule] = ()) -> None:
        self.include: Tuple[Rule, ...] = tuple(include)

    @classmethod
    def of(cls, value: Any) -> "RuleSet":
        """Build a rule set from None, a single rule-like value or a list of them."""
        if value is None:
            return cls()
        if isinstance(value, RuleSet):
            return value
        if isinstance(value, (list, tuple)):
            return cls(Rule.coerce(item) for item in value)
        return cls((Rule.coerce(value),))

    def matches(self, identity: Optional[str]) -> bool:
        return any(rule_matches(rule, identity) for rule in self.include)

    def __len__(self) -> int:
        return len(self.include)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RuleSet):
            return NotImplemented
        return self.include == other.include

    def __repr__(self) -> str:
        return f"RuleSet(include={list(self.include)!r})"
