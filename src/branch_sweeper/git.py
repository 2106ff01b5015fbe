"""Git repository operations."""

import logging
from pathlib import Path

from git import GitCommandError, InvalidGitRepositoryError, NoSuchPathError, Repo

logger = logging.getLogger(__name__)


class GitError(Exception):
    """Git operation error."""


def _command_error(err: GitCommandError) -> str:
    """Prefer git's own stderr over the full command dump."""
    stderr = str(err.stderr or "").strip()
    return stderr or str(err)


BRANCH_FORMAT = "--format=%(refname:lstrip=2)%(if)%(symref)%(then) -> %(symref:lstrip=2)%(end)"


def parse_branch_listing(output: str) -> list[str]:
    """Parse `git branch --format` output into branch entries.

    Drops the detached HEAD pseudo entry such as `(HEAD detached at 1a2b3c4)`.
    Symbolic ref lines (`origin/HEAD -> origin/main`) are kept as-is.
    """
    entries = []
    for line in output.splitlines():
        entry = line.strip()
        if not entry or entry.startswith("("):
            continue
        entries.append(entry)
    return entries


class GitRepo:
    """Git repository operations."""

    def __init__(self, path: Path) -> None:
        """Initialize repository."""
        try:
            self.repo: Repo = Repo(path, search_parent_directories=True)
            if self.repo.bare:
                raise GitError("Cannot operate on bare repository")
        except (GitCommandError, ValueError, InvalidGitRepositoryError, NoSuchPathError) as err:
            raise GitError(f"Not inside a git repository: {path}") from err

    def fetch_and_prune(self, remote: str) -> None:
        """Fetch from a remote and prune stale remote-tracking refs."""
        logger.debug("git fetch %s --prune", remote)
        try:
            self.repo.git.fetch(remote, "--prune")
        except GitCommandError as err:
            raise GitError(f"Failed to fetch from {remote}: {_command_error(err)}") from err

    def get_current_branch_name(self) -> str:
        """Get current branch name."""
        try:
            return self.repo.active_branch.name
        except TypeError:
            # Detached HEAD has no branch to keep
            return ""
        except (GitCommandError, ValueError) as err:
            raise GitError(f"Failed to get current branch: {err}") from err

    def _has_ref(self, ref: str) -> bool:
        try:
            self.repo.git.show_ref("--verify", "--quiet", ref)
        except GitCommandError:
            return False
        return True

    def has_local_branch(self, name: str) -> bool:
        """Check whether `refs/heads/<name>` exists."""
        return self._has_ref(f"refs/heads/{name}")

    def has_remote_branch(self, remote: str, name: str) -> bool:
        """Check whether `refs/remotes/<remote>/<name>` exists."""
        return self._has_ref(f"refs/remotes/{remote}/{name}")

    def list_merged_local(self, base: str) -> list[str]:
        """List local branches merged into `base`."""
        try:
            return parse_branch_listing(self.repo.git.branch("--no-color", BRANCH_FORMAT, "--merged", base))
        except GitCommandError as err:
            raise GitError(f"Failed to list branches merged into {base}: {_command_error(err)}") from err

    def list_merged_remote(self, remote: str, base: str) -> list[str]:
        """List remote-tracking branches merged into `<remote>/<base>`.

        Entries keep their `<remote>/` prefix.
        """
        try:
            output = self.repo.git.branch("-r", "--no-color", BRANCH_FORMAT, "--merged", f"{remote}/{base}")
            return parse_branch_listing(output)
        except GitCommandError as err:
            raise GitError(f"Failed to list branches merged into {remote}/{base}: {_command_error(err)}") from err

    def delete_local_branch(self, name: str, force: bool = False) -> None:
        """Delete a local branch.

        Without `force` git refuses to delete a branch whose work is not
        merged into HEAD or its upstream.
        """
        flag = "-D" if force else "-d"
        logger.debug("git branch %s %s", flag, name)
        try:
            self.repo.git.branch(flag, name)
        except GitCommandError as err:
            raise GitError(f"Failed to delete local branch {name}: {_command_error(err)}") from err

    def delete_remote_branch(self, remote: str, name: str) -> None:
        """Delete a branch on the remote."""
        logger.debug("git push %s --delete %s", remote, name)
        try:
            self.repo.git.push(remote, "--delete", name)
        except GitCommandError as err:
            raise GitError(f"Failed to delete remote branch {remote}/{name}: {_command_error(err)}") from err
