"""Branch selection rules.

Decides which merged branches are eligible for deletion. Everything here is
a pure function of its inputs: no git calls, no output.
"""

from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from fnmatch import fnmatchcase
from typing import Optional


def matches(name: str, pattern: str) -> bool:
    """Check a branch name against a glob pattern.

    `*` matches any sequence (including `/`), `?` any single character.
    Matching is case-sensitive.
    """
    return fnmatchcase(name, pattern)


def is_symbolic_ref(entry: str) -> bool:
    """Check for pointer entries such as `origin/HEAD -> origin/main`."""
    return "->" in entry


@dataclass(frozen=True, order=True)
class Branch:
    """A branch name and where it lives."""

    name: str
    remote: Optional[str] = None

    @property
    def is_remote(self) -> bool:
        return self.remote is not None

    @property
    def ref(self) -> str:
        """Display name, prefixed with the remote for remote-tracking branches."""
        if self.remote is None:
            return self.name
        return f"{self.remote}/{self.name}"


@dataclass(frozen=True)
class Selection:
    """Branches marked for deletion, split by scope."""

    local: tuple[Branch, ...] = ()
    remote: tuple[Branch, ...] = ()

    def __iter__(self) -> Iterator[Branch]:
        yield from self.local
        yield from self.remote

    def __len__(self) -> int:
        return len(self.local) + len(self.remote)

    def __bool__(self) -> bool:
        return len(self) > 0


@dataclass(frozen=True)
class BranchSelector:
    """Filter merged branch listings down to deletable names."""

    pattern: str
    protected: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        # Accept any iterable of names
        object.__setattr__(self, "protected", frozenset(self.protected))

    def _strip_remote(self, entry: str, remote: str) -> Optional[str]:
        prefix = f"{remote}/"
        if not entry.startswith(prefix):
            return None
        return entry[len(prefix) :]

    def select(
        self,
        candidates: Mapping[str, Iterable[str]],
        bases: Sequence[str],
        current: Optional[str] = None,
        exclude_names: Iterable[str] = (),
        remote: Optional[str] = None,
    ) -> tuple[str, ...]:
        """Compute the sorted names eligible for deletion.

        Args:
            candidates: Raw "merged into" listing per base name
            bases: Bases to union over; bases without a listing are skipped
            current: Checked-out branch, never selected
            exclude_names: Names that are always dropped
            remote: Remote name whose prefix is stripped from every entry;
                entries of other remotes are dropped

        Returns:
            Deduplicated, lexicographically sorted branch names
        """
        names: set[str] = set()
        for base in bases:
            for entry in candidates.get(base, ()):
                entry = entry.strip()
                if not entry or is_symbolic_ref(entry):
                    continue
                if remote is not None:
                    stripped = self._strip_remote(entry, remote)
                    if not stripped:
                        continue
                    entry = stripped
                names.add(entry)

        excluded = frozenset(exclude_names)
        selected = [
            name
            for name in names
            if matches(name, self.pattern)
            and name not in self.protected
            and name != current
            and name not in excluded
        ]
        return tuple(sorted(selected))

    def select_remote(
        self,
        candidates: Mapping[str, Iterable[str]],
        bases: Sequence[str],
        remote: str,
    ) -> tuple[Branch, ...]:
        """Select remote-tracking branches on `remote`, never touching a base."""
        names = self.select(candidates, bases, exclude_names=bases, remote=remote)
        return tuple(Branch(name, remote) for name in names)
