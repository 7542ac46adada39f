"""Unit tests for loading docsmith.yaml configuration."""

from __future__ import annotations

import typing as typ
from textwrap import dedent

import pytest

from docsmith.components import create_default_registry
from docsmith.components.values import PropKind
from docsmith.config import (
    PropConfig,
    SiteConfig,
    SiteConfigError,
    load_site_config,
    register_configured_components,
)

if typ.TYPE_CHECKING:
    from pathlib import Path

FULL_CONFIG = dedent(
    """\
    defaults:
      docs_dir: content
      root_path: /handbook
      root_title: Handbook
      words_per_minute: 250
      strict_components: true
    components:
      Badge:
        props:
          label: {type: string, required: true}
          tone: {type: string, default: neutral, choices: [neutral, success]}
          count: number
    """
)


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "docsmith.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def test_missing_file_yields_defaults(tmp_path: Path) -> None:
    """An absent configuration file falls back to SiteConfig()."""
    config = load_site_config(tmp_path / "absent.yaml")
    assert config == SiteConfig(), f"expected defaults, got {config!r}"
    assert (config.root_path, config.root_title) == ("/docs", "Documentation"), (
        "unexpected navigation defaults"
    )


def test_full_config_is_parsed(tmp_path: Path) -> None:
    """Defaults and component declarations are read into dataclasses."""
    config = load_site_config(_write(tmp_path, FULL_CONFIG))
    assert config.docs_dir == "content", "docs_dir should be overridden"
    assert config.root_path == "/handbook", "root_path should be overridden"
    assert config.words_per_minute == 250, "words_per_minute should be read"
    assert config.strict_components is True, "strict mode should be enabled"
    badge = config.get_component("Badge")
    assert badge.props["label"] == PropConfig(kind=PropKind.STRING, required=True), (
        f"unexpected label prop {badge.props['label']!r}"
    )
    tone = badge.props["tone"]
    assert (tone.default, tone.has_default, tone.choices) == (
        "neutral",
        True,
        ("neutral", "success"),
    ), f"unexpected tone prop {tone!r}"
    assert badge.props["count"].kind is PropKind.NUMBER, "shorthand type not read"


def test_non_mapping_root_is_rejected(tmp_path: Path) -> None:
    """The top level must be a mapping."""
    with pytest.raises(TypeError, match="mapping"):
        load_site_config(_write(tmp_path, "- just\n- a list\n"))


@pytest.mark.parametrize(
    ("text", "message"),
    [
        ("components:\n  badge: {}\n", "uppercase"),
        (
            "components:\n  Badge:\n    props:\n      size: {type: integer}\n",
            "unknown type",
        ),
        ("defaults:\n  words_per_minute: 0\n", "positive integer"),
        ("defaults:\n  words_per_minute: fast\n", "positive integer"),
        ("defaults:\n  words_per_minute: true\n", "positive integer"),
        (
            "components:\n  Badge:\n    props:\n      tone: {choices: neutral}\n",
            "must be a list",
        ),
    ],
)
def test_invalid_config_raises(tmp_path: Path, text: str, message: str) -> None:
    """Invalid declarations raise SiteConfigError."""
    with pytest.raises(SiteConfigError, match=message):
        load_site_config(_write(tmp_path, text))


def test_unknown_component_lookup_lists_known_names() -> None:
    """Looking up an undeclared component raises KeyError."""
    with pytest.raises(KeyError, match="Configured components: none"):
        SiteConfig().get_component("Badge")


def test_configured_components_are_registered(tmp_path: Path) -> None:
    """Declared components resolve with defaults and choice validation."""
    registry = create_default_registry()
    config = load_site_config(_write(tmp_path, FULL_CONFIG))
    assert register_configured_components(registry, config) == ["Badge"], (
        "expected Badge to be registered"
    )

    missing = registry.resolve("Badge", {})
    assert missing.errors == [
        'Required prop "label" is missing for component "Badge"'
    ], f"unexpected errors {missing.errors!r}"

    resolved = registry.resolve("Badge", {"label": "New"})
    assert resolved.output == {"label": "New", "tone": "neutral"}, (
        f"pass-through handler should return the resolved props, got {resolved.output!r}"
    )

    rejected = registry.resolve("Badge", {"label": "New", "tone": "loud"})
    assert rejected.errors == [
        'Prop "tone" failed custom validation for component "Badge"'
    ], f"unexpected errors {rejected.errors!r}"
