import os
from utils.command_executor import CommandExecutor
from utils.git_utils import GitBackend
from utils.custom_logger import Logger
from core.errors import CacheInitError, GitCommandError


class CacheInitializer:
    def __init__(self, git_backend: GitBackend, command_executor: CommandExecutor) -> None:
        if not git_backend:
            raise ValueError("GitBackend instance is required")
        self.git_backend = git_backend
        self.command_executor = command_executor
        self.logger = Logger(self.__class__.__name__)

    def ensure_cache(self, cache_dir: str) -> bool:
        """Create the cache repository unless its .git directory already exists.

        Returns True when a repository was initialized by this call.
        """
        git_dir = os.path.join(cache_dir, ".git")
        if os.path.exists(git_dir):
            self.logger.debug(f"Cache repository already present: {cache_dir}")
            return False

        self.logger.info(f"Initializing cache repository in {cache_dir}")
        try:
            self.command_executor.execute("mkdir_command", {"path": cache_dir})
        except OSError as e:
            raise CacheInitError("unable to init cache dir") from e

        try:
            self.git_backend.init(cache_dir)
        except GitCommandError as e:
            raise CacheInitError("unable to init cache dir") from e
        return True
