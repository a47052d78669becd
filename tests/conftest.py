"""Shared fixtures: an in-memory git backend that records every call."""

import os
from typing import Dict, List, Tuple

import pytest

from core.errors import GitCommandError
from utils.git_utils import GitBackend


class FakeGit(GitBackend):
    """GitBackend double keyed by remote name.

    ``counts`` and ``logs`` map a remote name to the raw text the real
    ``rev-list``/``log`` queries would print; ``failing`` maps an operation
    name to the set of remote names (or ``"*"``) that should raise.
    """

    def __init__(self) -> None:
        self.remotes: Dict[str, str] = {}
        self.counts: Dict[str, str] = {}
        self.logs: Dict[str, str] = {}
        self.failing: Dict[str, set] = {}
        self.calls: List[Tuple] = []

    def _maybe_fail(self, operation: str, key: str = "*") -> None:
        targets = self.failing.get(operation, set())
        if "*" in targets or key in targets:
            raise GitCommandError(f"git {operation} exited with code 128")

    def init(self, repository_path: str) -> None:
        self.calls.append(("init", repository_path))
        self._maybe_fail("init")
        os.makedirs(os.path.join(repository_path, ".git"), exist_ok=True)

    def list_remotes(self, repository_path: str) -> str:
        self.calls.append(("list_remotes", repository_path))
        self._maybe_fail("list_remotes")
        return "".join(f"{name}\n" for name in self.remotes)

    def add_remote(self, repository_path: str, remote_name: str, url: str) -> None:
        self.calls.append(("add_remote", remote_name, url))
        self._maybe_fail("add_remote", remote_name)
        self.remotes[remote_name] = url

    def update_remote(self, repository_path: str, remote_name: str) -> None:
        self.calls.append(("update_remote", remote_name))
        self._maybe_fail("update_remote", remote_name)

    def count_divergence(self, repository_path: str, remote_name: str, src: str, dst: str) -> str:
        self.calls.append(("count_divergence", remote_name, src, dst))
        self._maybe_fail("count_divergence", remote_name)
        return self.counts.get(remote_name, "0\t0\n")

    def list_divergence_commits(self, repository_path: str, remote_name: str, src: str, dst: str) -> str:
        self.calls.append(("list_divergence_commits", remote_name, src, dst))
        self._maybe_fail("list_divergence_commits", remote_name)
        return self.logs.get(remote_name, "")

    def called(self, operation: str) -> List[Tuple]:
        return [call for call in self.calls if call[0] == operation]


@pytest.fixture
def fake_git() -> FakeGit:
    return FakeGit()


@pytest.fixture
def cache_dir(tmp_path) -> str:
    return str(tmp_path / "cache")
