"""Merged branch sweeping."""

import logging
from dataclasses import dataclass, field
from typing import Protocol

from branch_sweeper.config import SweepConfig
from branch_sweeper.git import GitError
from branch_sweeper.selection import Branch, BranchSelector, Selection

logger = logging.getLogger(__name__)


class Repository(Protocol):
    """Git primitives the sweeper relies on."""

    def fetch_and_prune(self, remote: str) -> None: ...

    def get_current_branch_name(self) -> str: ...

    def has_local_branch(self, name: str) -> bool: ...

    def has_remote_branch(self, remote: str, name: str) -> bool: ...

    def list_merged_local(self, base: str) -> list[str]: ...

    def list_merged_remote(self, remote: str, base: str) -> list[str]: ...

    def delete_local_branch(self, name: str, force: bool = False) -> None: ...

    def delete_remote_branch(self, remote: str, name: str) -> None: ...


@dataclass
class SweepReport:
    """Outcome of a sweep."""

    selection: Selection
    applied: bool = False
    deleted: list[Branch] = field(default_factory=list)
    failed: list[tuple[Branch, str]] = field(default_factory=list)


class BranchSweeper:
    """Find merged branches and delete them, or report what would go."""

    def __init__(self, repo: Repository, config: SweepConfig) -> None:
        self.repo = repo
        self.config = config
        self.selector = BranchSelector(config.pattern, config.protected)

    def _collect_local(self) -> dict[str, list[str]]:
        merged: dict[str, list[str]] = {}
        for base in self.config.bases:
            if not self.repo.has_local_branch(base):
                logger.debug("Local base branch not found: %s (skipping local merged check for it)", base)
                continue
            merged[base] = self.repo.list_merged_local(base)
        return merged

    def _collect_remote(self) -> dict[str, list[str]]:
        remote = self.config.remote
        merged: dict[str, list[str]] = {}
        for base in self.config.bases:
            if not self.repo.has_remote_branch(remote, base):
                logger.debug("Remote base branch not found: %s/%s (skipping remote merged check for it)", remote, base)
                continue
            merged[base] = self.repo.list_merged_remote(remote, base)
        return merged

    def plan(self) -> Selection:
        """Work out which branches are eligible for deletion.

        Reads repository state only.
        """
        local: tuple[Branch, ...] = ()
        remote: tuple[Branch, ...] = ()

        if self.config.scan_local:
            current = self.repo.get_current_branch_name()
            merged = self._collect_local()
            names = self.selector.select(merged, self.config.bases)
            if current and current in names:
                logger.debug("Skip current branch: %s", current)
            local = tuple(Branch(name) for name in names if name != current)
        if self.config.scan_remote:
            remote = self.selector.select_remote(self._collect_remote(), self.config.bases, self.config.remote)

        return Selection(local=local, remote=remote)

    def _delete(self, branch: Branch) -> None:
        if branch.remote is None:
            self.repo.delete_local_branch(branch.name, force=self.config.force)
        else:
            self.repo.delete_remote_branch(branch.remote, branch.name)

    def execute(self, selection: Selection) -> SweepReport:
        """Delete every selected branch, or nothing in dry-run mode.

        Each deletion stands alone: a failure is logged and the batch goes on.
        """
        report = SweepReport(selection=selection, applied=self.config.apply)
        if not self.config.apply:
            return report

        for branch in selection:
            try:
                self._delete(branch)
            except GitError as err:
                logger.error("%s", err)
                report.failed.append((branch, str(err)))
                continue
            report.deleted.append(branch)
        return report

    def run(self) -> SweepReport:
        """Fetch once, plan, then act on the plan."""
        self.repo.fetch_and_prune(self.config.remote)
        return self.execute(self.plan())
