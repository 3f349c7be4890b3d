"""Resolved configuration: level defaults, per-check overrides, ignore globs."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from fnmatch import fnmatchcase
from types import MappingProxyType
from typing import Mapping, Sequence

from wcag_lsp.schema import PolicyFile


class Level(str, Enum):
    A = "A"
    AA = "AA"
    AAA = "AAA"


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class RuleOverride:
    """Either a forced severity or, with `severity=None`, a disabled check."""

    severity: Severity | None = None

    @property
    def disabled(self) -> bool:
        return self.severity is None


OFF = RuleOverride()

_SEVERITY_NAMES = {
    "error": Severity.ERROR,
    "warning": Severity.WARNING,
    "warn": Severity.WARNING,
}
_OFF_NAMES = {"off", "false", "disable"}


def parse_severity(value: str) -> Severity | None:
    return _SEVERITY_NAMES.get(value.strip().lower())


def parse_override(value: str) -> RuleOverride | None:
    lowered = value.strip().lower()
    if lowered in _OFF_NAMES:
        return OFF
    severity = parse_severity(lowered)
    if severity is None:
        return None
    return RuleOverride(severity=severity)


@dataclass(frozen=True)
class Policy:
    severity_a: Severity = Severity.ERROR
    severity_aa: Severity = Severity.WARNING
    severity_aaa: Severity = Severity.WARNING
    overrides: Mapping[str, RuleOverride] = field(default_factory=dict)
    ignore_patterns: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "overrides", MappingProxyType(dict(self.overrides)))
        object.__setattr__(self, "ignore_patterns", tuple(self.ignore_patterns))

    @classmethod
    def from_file(cls, data: PolicyFile) -> "Policy":
        defaults = cls()

        def level_default(key: str, fallback: Severity) -> Severity:
            raw = data.severity.get(key)
            if raw is None:
                return fallback
            return parse_severity(raw) or fallback

        overrides: dict[str, RuleOverride] = {}
        for check_id, raw in data.rules.items():
            override = parse_override(raw)
            if override is not None:
                overrides[check_id] = override
        return cls(
            severity_a=level_default("A", defaults.severity_a),
            severity_aa=level_default("AA", defaults.severity_aa),
            severity_aaa=level_default("AAA", defaults.severity_aaa),
            overrides=overrides,
            ignore_patterns=tuple(data.ignore.patterns),
        )

    def severity_for_level(self, level: Level) -> Severity:
        if level is Level.A:
            return self.severity_a
        if level is Level.AA:
            return self.severity_aa
        return self.severity_aaa

    def is_enabled(self, check_id: str) -> bool:
        override = self.overrides.get(check_id)
        return override is None or not override.disabled

    def effective_severity(self, check_id: str, level: Level) -> Severity:
        override = self.overrides.get(check_id)
        if override is not None and override.severity is not None:
            return override.severity
        return self.severity_for_level(level)

    def is_ignored(self, path: str, relative: str | None = None) -> bool:
        """Patterns starting with "/" match the absolute `path`. Other patterns
        match `relative`, the workspace-relative path, or `path` when the
        document is outside the workspace."""
        for pattern in self.ignore_patterns:
            target = path if pattern.startswith("/") or relative is None else relative
            if target and glob_match(pattern, target):
                return True
        return False


def _match_segments(pattern: Sequence[str], path: Sequence[str]) -> bool:
    if not pattern:
        return not path
    head, rest = pattern[0], pattern[1:]
    if head == "**":
        return any(_match_segments(rest, path[index:]) for index in range(len(path) + 1))
    return bool(path) and fnmatchcase(path[0], head) and _match_segments(rest, path[1:])


def glob_match(pattern: str, path: str) -> bool:
    """`*` and `?` stay inside one path segment; a `**` segment spans any number."""
    return _match_segments(
        [part for part in pattern.split("/") if part],
        [part for part in path.split("/") if part],
    )
