"""Test configuration and fixtures."""

from pathlib import Path
from typing import Generator

import pytest
from git import Actor, Repo


@pytest.fixture
def test_env(tmp_path: Path) -> Generator[tuple[Path, Path], None, None]:
    """Create a test environment with local and remote repositories.

    Branch layout:
        main, dev                 bases, pushed
        feature/merged            merged into main, pushed
        bugfix/merged             merged into main, pushed
        feature/dev-merged        merged into dev only, pushed
        feature/unmerged          has commits outside every base, pushed
        feature/current           at main, pushed, checked out

    No local branch tracks an upstream and `origin/HEAD` points at `origin/main`.

    Returns:
        Tuple of (local_repo_path, remote_repo_path)
    """
    remote_path = tmp_path / "remote"
    local_path = tmp_path / "local"
    remote_path.mkdir()
    local_path.mkdir()

    Repo.init(remote_path, bare=True)
    local_repo = Repo.init(local_path)

    author = Actor("Test User", "test@example.com")
    local_repo.config_writer().set_value("user", "name", author.name).release()
    local_repo.config_writer().set_value("user", "email", author.email).release()

    readme = local_path / "README.md"
    readme.write_text("# Test Repository")
    local_repo.index.add(["README.md"])
    local_repo.index.commit("Initial commit", author=author)

    if "main" not in local_repo.heads:
        local_repo.create_head("main")
    main_branch = local_repo.heads.main
    main_branch.checkout()

    origin = local_repo.create_remote("origin", url=str(remote_path))
    origin.push("main")

    local_repo.create_head("dev")
    origin.push("dev")

    def create_branch(name: str, start: str, merge_into: str = "") -> None:
        """Create a branch with one commit, optionally merged into a base."""
        local_repo.heads[start].checkout()
        branch = local_repo.create_head(name)
        branch.checkout()

        test_file = local_path / f"{name.replace('/', '_')}.txt"
        test_file.write_text(f"{name} content")
        local_repo.index.add([test_file.name])
        local_repo.index.commit(f"Add {name}", author=author)
        origin.push(name)

        if merge_into:
            local_repo.heads[merge_into].checkout()
            local_repo.git.merge(name, "--no-ff")
            origin.push(merge_into)

    create_branch("feature/merged", "main", merge_into="main")
    create_branch("bugfix/merged", "main", merge_into="main")
    create_branch("feature/dev-merged", "dev", merge_into="dev")
    create_branch("feature/unmerged", "main")

    main_branch.checkout()
    local_repo.create_head("feature/current")
    origin.push("feature/current")
    local_repo.heads["feature/current"].checkout()

    local_repo.git.fetch("origin")
    local_repo.git.remote("set-head", "origin", "main")

    yield local_path, remote_path


@pytest.fixture
def local_repo(test_env: tuple[Path, Path]) -> Repo:
    """GitPython handle on the local repository."""
    local_path, _ = test_env
    return Repo(local_path)


@pytest.fixture
def remote_repo(test_env: tuple[Path, Path]) -> Repo:
    """GitPython handle on the bare remote repository."""
    _, remote_path = test_env
    return Repo(remote_path)
