import hashlib
from utils.git_utils import GitBackend
from utils.custom_logger import Logger
from core.errors import GitCommandError, RemoteError


def remote_name_for_url(url: str) -> str:
    return hashlib.sha256(url.encode("utf-8")).hexdigest()


class RemoteRegistry:
    def __init__(self, git_backend: GitBackend) -> None:
        if not git_backend:
            raise ValueError("GitBackend instance is required")
        self.git_backend = git_backend
        self.logger = Logger(self.__class__.__name__)

    def remote_exists(self, cache_dir: str, remote_name: str) -> bool:
        listing = self.git_backend.list_remotes(cache_dir)
        for line in listing.splitlines():
            if line.strip() == remote_name:
                return True
        return False

    def ensure_remote(self, cache_dir: str, url: str) -> str:
        remote_name = remote_name_for_url(url)
        try:
            exists = self.remote_exists(cache_dir, remote_name)
        except GitCommandError as e:
            raise RemoteError(f"unable to determine state of git remote: {url}") from e

        if exists:
            self.logger.debug(f"Remote {remote_name} already registered for {url}")
            return remote_name

        try:
            self.git_backend.add_remote(cache_dir, remote_name, url)
        except GitCommandError as e:
            raise RemoteError(f"unable to init remote: {url}") from e
        self.logger.info(f"Registered remote {remote_name} for {url}")
        return remote_name

    def update_remote(self, cache_dir: str, remote_name: str, url: str) -> None:
        try:
            self.git_backend.update_remote(cache_dir, remote_name)
        except GitCommandError as e:
            raise RemoteError(f"unable to update remote: {url}") from e
