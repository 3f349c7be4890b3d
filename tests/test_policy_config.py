from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from wcag_lsp.config import DEFAULT_CONFIG_NAME, load_config, load_policy
from wcag_lsp.policy import OFF, Level, Policy, RuleOverride, Severity, glob_match, parse_override


def _write_config(root: Path, body: str) -> Path:
    path = root / DEFAULT_CONFIG_NAME
    path.write_text(textwrap.dedent(body).strip() + "\n")
    return path


def test_default_policy() -> None:
    policy = Policy()
    assert policy.severity_for_level(Level.A) is Severity.ERROR
    assert policy.severity_for_level(Level.AA) is Severity.WARNING
    assert policy.severity_for_level(Level.AAA) is Severity.WARNING
    assert policy.is_enabled("img-alt")
    assert not policy.is_ignored("/any/path.html")


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("error", RuleOverride(Severity.ERROR)),
        ("warning", RuleOverride(Severity.WARNING)),
        ("warn", RuleOverride(Severity.WARNING)),
        (" Warn ", RuleOverride(Severity.WARNING)),
        ("off", OFF),
        ("false", OFF),
        ("disable", OFF),
        ("loud", None),
    ],
)
def test_parse_override(raw: str, expected: RuleOverride | None) -> None:
    assert parse_override(raw) == expected


def test_policy_overrides_and_level_defaults(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
        [severity]
        A = "warning"
        AA = "error"
        AAA = "nonsense"

        [rules]
        img-alt = "error"
        heading-order = "off"
        button-name = "shout"

        [ignore]
        patterns = ["node_modules/**", "*.min.html"]
        """,
    )
    policy = load_policy(tmp_path)
    assert policy.severity_a is Severity.WARNING
    assert policy.severity_aa is Severity.ERROR
    assert policy.severity_aaa is Severity.WARNING
    assert policy.effective_severity("img-alt", Level.A) is Severity.ERROR
    assert policy.effective_severity("anchor-content", Level.A) is Severity.WARNING
    assert not policy.is_enabled("heading-order")
    assert policy.is_enabled("button-name")
    assert "button-name" not in policy.overrides
    assert policy.is_ignored("/w/node_modules/pkg/index.html", "node_modules/pkg/index.html")
    assert policy.is_ignored("/w/app.min.html", "app.min.html")
    assert not policy.is_ignored("/w/dist/app.min.html", "dist/app.min.html")
    assert not policy.is_ignored("/w/src/index.html", "src/index.html")


@pytest.mark.parametrize(
    ("pattern", "path", "expected"),
    [
        ("*.html", "index.html", True),
        ("*.html", "src/index.html", False),
        ("**/*.html", "src/pages/index.html", True),
        ("**/*.html", "index.html", True),
        ("vendor/*", "vendor/lib.html", True),
        ("vendor/*", "vendor/deep/lib.html", False),
        ("vendor/**", "vendor/deep/lib.html", True),
        ("src/**/gen/*.tsx", "src/a/b/gen/App.tsx", True),
        ("src/?.html", "src/ab.html", False),
    ],
)
def test_glob_match_keeps_star_inside_a_segment(pattern: str, path: str, expected: bool) -> None:
    assert glob_match(pattern, path) is expected


def test_relative_patterns_match_the_workspace_relative_path() -> None:
    policy = Policy(ignore_patterns=("*.html", "/opt/shared/**"))
    assert not policy.is_ignored("/home/me/site/src/index.html", "src/index.html")
    assert policy.is_ignored("/home/me/site/index.html", "index.html")
    assert policy.is_ignored("/opt/shared/widgets/menu.html", None)
    assert policy.is_ignored("/opt/shared/widgets/menu.html", "widgets/menu.html")
    # Outside the workspace the absolute path is all there is.
    assert not policy.is_ignored("/elsewhere/page.html")


def test_policy_is_immutable(tmp_path: Path) -> None:
    _write_config(tmp_path, '[rules]\nimg-alt = "off"\n')
    policy = load_policy(tmp_path)
    with pytest.raises(TypeError):
        policy.overrides["img-alt"] = RuleOverride(Severity.ERROR)  # type: ignore[index]


def test_missing_config_yields_defaults(tmp_path: Path) -> None:
    assert load_config(tmp_path) == {}
    assert load_policy(tmp_path) == Policy()


def test_invalid_toml_yields_defaults(tmp_path: Path) -> None:
    _write_config(tmp_path, "[rules\nimg-alt = ")
    assert load_policy(tmp_path) == Policy()


def test_wrong_shape_yields_defaults(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
        [rules]
        img-alt = 3
        """,
    )
    assert load_policy(tmp_path) == Policy()


def test_explicit_config_path(tmp_path: Path) -> None:
    path = tmp_path / "custom.toml"
    path.write_text('[severity]\nAAA = "error"\n')
    policy = load_policy(config_path=path)
    assert policy.severity_for_level(Level.AAA) is Severity.ERROR


def test_unreadable_config_yields_defaults(tmp_path: Path) -> None:
    (tmp_path / DEFAULT_CONFIG_NAME).write_bytes(b"\xff\xfe[rules]")
    assert load_policy(tmp_path) == Policy()
