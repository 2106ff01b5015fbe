"""Sweep configuration.

Options come from the command line, with the `REMOTE`, `PATTERN`, `BASES`
and `PROTECTED` environment variables supplying defaults.
"""

import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Optional

DEFAULT_REMOTE = "origin"
DEFAULT_PATTERN = "feature/*"
DEFAULT_BASES = ("main", "dev")
DEFAULT_PROTECTED = ("main", "dev", "master", "release", "staging", "production")


class ConfigError(Exception):
    """Invalid option combination or value."""


def _split_env(environ: Mapping[str, str], name: str) -> list[str]:
    return environ.get(name, "").split()


def _dedupe(names: Sequence[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(names))


@dataclass(frozen=True)
class SweepConfig:
    """Resolved settings for one sweep."""

    remote: str = DEFAULT_REMOTE
    pattern: str = DEFAULT_PATTERN
    bases: tuple[str, ...] = DEFAULT_BASES
    protected: frozenset[str] = frozenset(DEFAULT_PROTECTED)
    apply: bool = False
    force: bool = False
    local_only: bool = False
    remote_only: bool = False

    def __post_init__(self) -> None:
        if self.local_only and self.remote_only:
            raise ConfigError("--local-only and --remote-only cannot be used together")
        if not self.pattern:
            raise ConfigError("--pattern requires a value")
        if not self.remote:
            raise ConfigError("--remote requires a value")
        if not self.bases:
            raise ConfigError("at least one base branch is required")

    @classmethod
    def from_options(
        cls,
        *,
        remote: str = DEFAULT_REMOTE,
        pattern: str = DEFAULT_PATTERN,
        bases: Optional[Sequence[str]] = None,
        protected: Optional[Sequence[str]] = None,
        apply: bool = False,
        force: bool = False,
        local_only: bool = False,
        remote_only: bool = False,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "SweepConfig":
        """Merge command line values with environment defaults.

        `BASES` seeds the base list and `--base` values extend it; the
        built-in bases apply only when both are empty. `PROTECTED` replaces
        the built-in protected names and `--protected` values extend it.
        """
        if environ is None:
            environ = os.environ

        extra_bases = list(bases or [])
        extra_protected = list(protected or [])
        if any(not name for name in extra_bases):
            raise ConfigError("--base requires a value")
        if any(not name for name in extra_protected):
            raise ConfigError("--protected requires a value")

        base_names = _split_env(environ, "BASES") + extra_bases
        protected_names = _split_env(environ, "PROTECTED") or list(DEFAULT_PROTECTED)

        return cls(
            remote=remote,
            pattern=pattern,
            bases=_dedupe(base_names) or DEFAULT_BASES,
            protected=frozenset(protected_names + extra_protected),
            apply=apply,
            force=force,
            local_only=local_only,
            remote_only=remote_only,
        )

    @property
    def scan_local(self) -> bool:
        return not self.remote_only

    @property
    def scan_remote(self) -> bool:
        return not self.local_only

    @property
    def mode(self) -> str:
        return "apply" if self.apply else "dry-run"
