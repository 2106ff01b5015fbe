"""Tests for option and environment resolution."""

import pytest

from branch_sweeper.config import DEFAULT_BASES, DEFAULT_PROTECTED, ConfigError, SweepConfig


def test_defaults() -> None:
    """Test built-in defaults with an empty environment."""
    config = SweepConfig.from_options(environ={})
    assert config.remote == "origin"
    assert config.pattern == "feature/*"
    assert config.bases == DEFAULT_BASES
    assert config.protected == frozenset(DEFAULT_PROTECTED)
    assert config.mode == "dry-run"
    assert config.scan_local
    assert config.scan_remote


def test_base_flags_extend_env_bases() -> None:
    """Test BASES seeds the list and --base values are appended."""
    config = SweepConfig.from_options(bases=["release/2.x"], environ={"BASES": "main  develop"})
    assert config.bases == ("main", "develop", "release/2.x")


def test_base_flags_replace_defaults() -> None:
    """Test explicit bases drop the built-in ones."""
    config = SweepConfig.from_options(bases=["trunk", "trunk"], environ={})
    assert config.bases == ("trunk",)


def test_protected_env_replaces_defaults() -> None:
    """Test PROTECTED replaces the built-in names and flags add to it."""
    config = SweepConfig.from_options(protected=["qa"], environ={"PROTECTED": "main trunk"})
    assert config.protected == frozenset({"main", "trunk", "qa"})


def test_protected_flags_extend_defaults() -> None:
    """Test --protected adds to the built-in names."""
    config = SweepConfig.from_options(protected=["qa"], environ={})
    assert "qa" in config.protected
    assert "production" in config.protected


def test_local_only_and_remote_only_conflict() -> None:
    """Test the scope flags are mutually exclusive."""
    with pytest.raises(ConfigError, match="cannot be used together"):
        SweepConfig.from_options(local_only=True, remote_only=True, environ={})


def test_scope_flags() -> None:
    """Test scope properties follow the flags."""
    local = SweepConfig.from_options(local_only=True, environ={})
    assert local.scan_local and not local.scan_remote
    remote = SweepConfig.from_options(remote_only=True, apply=True, environ={})
    assert remote.scan_remote and not remote.scan_local
    assert remote.mode == "apply"


@pytest.mark.parametrize(
    ("options", "message"),
    [
        ({"pattern": ""}, "--pattern requires a value"),
        ({"remote": ""}, "--remote requires a value"),
        ({"bases": [""]}, "--base requires a value"),
        ({"protected": [""]}, "--protected requires a value"),
    ],
)
def test_empty_values_rejected(options: dict, message: str) -> None:
    """Test options given without a usable value are errors."""
    with pytest.raises(ConfigError, match=message):
        SweepConfig.from_options(environ={}, **options)
