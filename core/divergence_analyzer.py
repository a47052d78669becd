from utils.git_utils import GitBackend
from utils.custom_logger import Logger
from config.schemas import Divergence, RepoStatus
from core.commit_lister import CommitLister
from core.errors import DivergenceParseError, GitCommandError


def _parse_count(field: str) -> int:
    if not (field.isascii() and field.isdigit()):
        raise DivergenceParseError(f"unable to examine output of rev-list: {field}", field)
    return int(field)


def parse_divergence_counts(output: str) -> Divergence:
    """Parse ``git rev-list --left-right --count`` output.

    The left column counts commits only on the source ref (behind), the right
    column commits only on the destination ref (ahead).
    """
    parts = output.strip().split("\t")
    if len(parts) != 2:
        raise DivergenceParseError(
            "unexpected output of git rev-list, expected 2 parts around \\t", output
        )
    behind = _parse_count(parts[0])
    ahead = _parse_count(parts[1])
    return Divergence(ahead=ahead, behind=behind)


def build_status_message(src: str, dst: str, divergence: Divergence) -> str:
    if divergence.equal:
        return f"{dst} is same as {src}"

    message = []
    if divergence.ahead > 0:
        message.append(f"{divergence.ahead} commits ahead")
    if divergence.behind > 0:
        message.append(f"{divergence.behind} commits behind")
    return f"compared to {src}, {dst} is {' and '.join(message)}"


class DivergenceAnalyzer:
    def __init__(self, git_backend: GitBackend, commit_lister: CommitLister) -> None:
        if not git_backend:
            raise ValueError("GitBackend instance is required")
        self.git_backend = git_backend
        self.commit_lister = commit_lister
        self.logger = Logger(self.__class__.__name__)

    def analyze(self, cache_dir: str, remote_name: str, url: str, src: str, dst: str) -> RepoStatus:
        context = f"unable to show difference for remote: {url}"
        try:
            output = self.git_backend.count_divergence(cache_dir, remote_name, src, dst)
        except GitCommandError as e:
            raise GitCommandError(context) from e
        try:
            divergence = parse_divergence_counts(output)
        except DivergenceParseError as e:
            raise DivergenceParseError(context, e.raw_output) from e

        self.logger.info(f"{url}: {divergence.ahead} ahead, {divergence.behind} behind")
        result = RepoStatus(url=url, equal=divergence.equal, status=build_status_message(src, dst, divergence))
        if divergence.equal:
            return result

        try:
            result.commits = self.commit_lister.list_commits(cache_dir, remote_name, src, dst)
        except GitCommandError as e:
            raise GitCommandError(context) from e
        return result
