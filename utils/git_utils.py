from abc import ABC, abstractmethod
from typing import List
from utils.custom_logger import Logger
from utils.command_executor import CommandExecutor
from core.errors import GitCommandError
import subprocess


def divergence_range(remote_name: str, src: str, dst: str) -> str:
    return f"{remote_name}/{src}...{remote_name}/{dst}"


class GitBackend(ABC):
    """Every git operation the comparison needs, one method per call."""

    @abstractmethod
    def init(self, repository_path: str) -> None:
        pass

    @abstractmethod
    def list_remotes(self, repository_path: str) -> str:
        """Return the raw remote listing, one remote name per line."""

    @abstractmethod
    def add_remote(self, repository_path: str, remote_name: str, url: str) -> None:
        pass

    @abstractmethod
    def update_remote(self, repository_path: str, remote_name: str) -> None:
        pass

    @abstractmethod
    def count_divergence(self, repository_path: str, remote_name: str, src: str, dst: str) -> str:
        """Return the raw ``behind<TAB>ahead`` output of a left-right count."""

    @abstractmethod
    def list_divergence_commits(self, repository_path: str, remote_name: str, src: str, dst: str) -> str:
        """Return the raw left-right oneline log of the same range."""


class GitOperator(GitBackend):
    def __init__(self, command_executor: CommandExecutor):
        self.logger = Logger(name=self.__class__.__name__)
        if not command_executor:
            raise ValueError("CommandExecutor instance is required")
        self.command_executor = command_executor

    def _execute_git(self, repository_path: str, command: str, args: List[str]) -> subprocess.CompletedProcess:
        params = {
            "command": command,
            "args": args,
            "cwd": repository_path
        }
        try:
            return self.command_executor.execute("git_command", params)
        except subprocess.CalledProcessError as e:
            raise GitCommandError(f"git {command} exited with code {e.returncode}") from e
        except FileNotFoundError as e:
            raise GitCommandError(f"unable to run git {command}") from e

    def init(self, repository_path: str) -> None:
        self.logger.info(f"Initializing empty git repository in {repository_path}")
        self._execute_git(repository_path, "init", [])

    def list_remotes(self, repository_path: str) -> str:
        # 'show -n' with no names prints bare remote names, one per line.
        result = self._execute_git(repository_path, "remote", ["show", "-n"])
        return result.stdout

    def add_remote(self, repository_path: str, remote_name: str, url: str) -> None:
        self.logger.info(f"Adding remote {remote_name} for {url} in {repository_path}")
        self._execute_git(repository_path, "remote", ["add", remote_name, url])

    def update_remote(self, repository_path: str, remote_name: str) -> None:
        self.logger.info(f"Updating remote {remote_name} in {repository_path}")
        self._execute_git(repository_path, "remote", ["update", remote_name])

    def count_divergence(self, repository_path: str, remote_name: str, src: str, dst: str) -> str:
        args = ["--left-right", "--count", divergence_range(remote_name, src, dst)]
        result = self._execute_git(repository_path, "rev-list", args)
        return result.stdout

    def list_divergence_commits(self, repository_path: str, remote_name: str, src: str, dst: str) -> str:
        args = ["--oneline", "--left-right", divergence_range(remote_name, src, dst)]
        result = self._execute_git(repository_path, "log", args)
        return result.stdout
