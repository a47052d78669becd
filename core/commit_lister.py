from typing import List
from utils.git_utils import GitBackend
from utils.custom_logger import Logger
from core.errors import GitCommandError


class CommitLister:
    def __init__(self, git_backend: GitBackend) -> None:
        if not git_backend:
            raise ValueError("GitBackend instance is required")
        self.git_backend = git_backend
        self.logger = Logger(self.__class__.__name__)

    def list_commits(self, cache_dir: str, remote_name: str, src: str, dst: str) -> List[str]:
        """Oneline summaries of the left-right range, in git's own order."""
        try:
            output = self.git_backend.list_divergence_commits(cache_dir, remote_name, src, dst)
        except GitCommandError as e:
            raise GitCommandError("unable to get git logs") from e

        commits = output.strip().split("\n")
        self.logger.debug(f"Listed {len(commits)} commits for {remote_name} between {src} and {dst}")
        return commits
