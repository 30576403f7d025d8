"""
Export filter.

The preference store also holds keys written by the OS and by frameworks
(window frames, keyboard state, iCloud flags...). Only the remaining keys
are user settings worth exporting.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Mapping

from .store import PreferenceStore


class MatchKind(Enum):
    """How an exclusion rule compares its pattern to a key."""

    CONTAINS = "contains"
    PREFIX = "prefix"
    EXACT = "exact"


@dataclass(frozen=True)
class ExclusionRule:
    """A single rule that drops matching keys from an export."""

    kind: MatchKind
    pattern: str

    def matches(self, key: str) -> bool:
        if self.kind is MatchKind.CONTAINS:
            return self.pattern in key
        if self.kind is MatchKind.PREFIX:
            return key.startswith(self.pattern)
        return key == self.pattern


EXCLUSION_RULES: tuple[ExclusionRule, ...] = (
    # Framework and system keys
    ExclusionRule(MatchKind.CONTAINS, "NS"),
    ExclusionRule(MatchKind.CONTAINS, "com.apple."),
    ExclusionRule(MatchKind.CONTAINS, "Apple"),
    ExclusionRule(MatchKind.CONTAINS, "METAL"),
    ExclusionRule(MatchKind.CONTAINS, "KB_"),
    ExclusionRule(MatchKind.CONTAINS, "cloud."),
    ExclusionRule(MatchKind.PREFIX, "_"),
    ExclusionRule(MatchKind.PREFIX, "AK"),
    # Individual keys injected by WebKit and the OS
    ExclusionRule(MatchKind.EXACT, "shouldShowRSVPDataDetectors"),
    ExclusionRule(MatchKind.EXACT, "MultipleSessionEnabled"),
    ExclusionRule(MatchKind.EXACT, "WebAutomaticSpellingCorrectionEnabled"),
    ExclusionRule(MatchKind.EXACT, "Country"),
)


def is_exportable_key(key: str, rules: Iterable[ExclusionRule] = EXCLUSION_RULES) -> bool:
    """Return True if no exclusion rule matches the key."""
    return not any(rule.matches(key) for rule in rules)


def filter_settings(
    preferences: Mapping[str, Any],
    rules: Iterable[ExclusionRule] = EXCLUSION_RULES,
) -> dict[str, Any]:
    """
    Select the user settings out of a full preference mapping.

    Values are passed through as-is.

    Args:
        preferences: Full store contents
        rules: Exclusion rules to apply

    Returns:
        New dict with only the exportable keys
    """
    rules = tuple(rules)
    return {
        key: value
        for key, value in preferences.items()
        if is_exportable_key(key, rules)
    }


def build_export_document(store: PreferenceStore) -> dict[str, Any]:
    """Snapshot the store and filter it down to exportable settings."""
    return filter_settings(store.as_dict())
