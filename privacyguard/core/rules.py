"""
Privacy Guard Rule Tables

Pattern rules detect sensitive content, whitelist rules mark known-safe
placeholders. Both tables are compiled once at import and exposed as
read-only mappings through a RuleSet.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional

from privacyguard.core.finding import Category


@dataclass(frozen=True)
class PatternRule:
    name: str
    label: str
    category: Category
    matcher: re.Pattern

    @property
    def pattern(self) -> str:
        return self.matcher.pattern


@dataclass(frozen=True)
class WhitelistRule:
    name: str
    matcher: re.Pattern

    @property
    def pattern(self) -> str:
        return self.matcher.pattern


# (name, label, category, pattern)
PATTERNS: list[tuple[str, str, Category, str]] = [
    # ── Credentials ──
    ("api_key", "API Keys", Category.CRITICAL,
     r'(api[_-]?key|secret[_-]?key|access[_-]?token)["\s]*[:=]["\s]*[a-zA-Z0-9_-]{20,}'),
    ("jwt_token", "JWT Tokens", Category.CRITICAL,
     r"(bearer\s+)?eyJ[a-zA-Z0-9_-]+\.eyJ[a-zA-Z0-9_-]+\.[a-zA-Z0-9_-]+"),
    ("password", "Passwords", Category.CRITICAL,
     r'(password|pwd|pass)["\s]*[:=]["\s]*[^"\s]{3,}'),

    # ── Financial / identity numbers ──
    ("credit_card", "Credit Cards", Category.CRITICAL,
     r"(\b\d{4}[-\s]?\d{4}[-\s]?\d{4}[-\s]?\d{4}\b|\b\d{13,19}\b)"),
    ("ssn", "SSNs", Category.CRITICAL,
     r"(\b\d{3}-\d{2}-\d{4}\b|\b\d{9}\b)"),

    # ── Personal information ──
    ("email", "Emails", Category.PII,
     r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}"),
    ("phone_us", "US Phones", Category.PII,
     r"(\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}|\+1[-.\s]?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4})"),
    ("phone_intl", "Intl Phones", Category.PII,
     r"(\+\d{1,3}[-.\s]?\(?\d{1,4}\)?[-.\s]?\d{1,4}[-.\s]?\d{1,9})"),
    ("personal_name", "Names", Category.PII,
     r'(first[_-]?name|last[_-]?name|full[_-]?name)["\s]*[:=]["\s]*[A-Z][a-z]+'),
    ("address", "Addresses", Category.PII,
     r"(\d+\s+[A-Z][a-z]+\s+(Street|St|Avenue|Ave|Road|Rd|Drive|Dr|Lane|Ln|Court|Ct|Place|Pl))"),

    # ── Infrastructure (flagged for review) ──
    ("connection_string", "Connection Strings", Category.WARNING,
     r'(server|host|database|uid|pwd)["\s]*[:=]'),
    ("ip_address", "IP Addresses", Category.WARNING,
     r"(\b(?:(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\.){3}(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\b)"),
]

WHITELIST: list[tuple[str, str]] = [
    ("test_email", r"(test@example\.com|user@test\.com|demo@.*\.test)"),
    ("localhost", r"(localhost|127\.0\.0\.1|0\.0\.0\.0)"),
    ("example_data", r"(example|sample|demo|test|placeholder)"),
    ("documentation", r"(TODO|FIXME|NOTE|XXX)"),
]


def compile_pattern(pattern: str) -> re.Pattern:
    """All rule matching is case-insensitive."""
    return re.compile(pattern, re.IGNORECASE)


class RuleSet:
    """
    Immutable pair of rule tables.

    ``patterns`` and ``whitelist`` are read-only mappings of rule name to
    rule. A RuleSet is built once and shared by every scan.
    """

    def __init__(
        self,
        patterns: Mapping[str, PatternRule],
        whitelist: Mapping[str, WhitelistRule],
    ) -> None:
        self._patterns = MappingProxyType(dict(patterns))
        self._whitelist = MappingProxyType(dict(whitelist))

    @property
    def patterns(self) -> Mapping[str, PatternRule]:
        return self._patterns

    @property
    def whitelist(self) -> Mapping[str, WhitelistRule]:
        return self._whitelist

    def category_of(self, rule_name: str) -> Category:
        return self._patterns[rule_name].category

    def by_category(self, category: Category) -> list[PatternRule]:
        return [rule for rule in self._patterns.values() if rule.category is category]

    def with_whitelist(self, extra: Optional[Mapping[str, str]]) -> "RuleSet":
        """Return a new RuleSet with additional whitelist patterns."""
        if not extra:
            return self
        whitelist = dict(self._whitelist)
        for name, pattern in extra.items():
            whitelist[name] = WhitelistRule(name=name, matcher=compile_pattern(pattern))
        return RuleSet(self._patterns, whitelist)

    @classmethod
    def from_tables(
        cls,
        patterns: list[tuple[str, str, Category, str]],
        whitelist: list[tuple[str, str]],
    ) -> "RuleSet":
        return cls(
            {
                name: PatternRule(
                    name=name,
                    label=label,
                    category=category,
                    matcher=compile_pattern(pattern),
                )
                for name, label, category, pattern in patterns
            },
            {
                name: WhitelistRule(name=name, matcher=compile_pattern(pattern))
                for name, pattern in whitelist
            },
        )


DEFAULT_RULESET = RuleSet.from_tables(PATTERNS, WHITELIST)
