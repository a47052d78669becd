import json
import sys
from abc import ABC, abstractmethod
from typing import List, Sequence, TextIO, Optional
from config.schemas import BruvConfig, RepoStatus
from core.errors import ReportError


class Reporter(ABC):
    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream: TextIO = stream if stream is not None else sys.stdout

    @abstractmethod
    def emit(self, status: RepoStatus) -> None:
        pass

    def finish(self) -> None:
        pass


class TextReporter(Reporter):
    """Streams one aligned line per repository as soon as it is compared."""

    def __init__(self, urls: Sequence[str], stream: Optional[TextIO] = None) -> None:
        super().__init__(stream)
        self.width = max((len(url) for url in urls), default=0)

    def emit(self, status: RepoStatus) -> None:
        if status.failed:
            print(f"{status.url:<{self.width}} error: {status.error}", file=self.stream)
            return
        print(f"{status.url:<{self.width}} {status.status}", file=self.stream)
        if not status.equal:
            for commit in status.commits or []:
                print(" ", commit, file=self.stream)


class JsonReporter(Reporter):
    """Buffers every record and prints them as one document at the end."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        super().__init__(stream)
        self.statuses: List[RepoStatus] = []

    def emit(self, status: RepoStatus) -> None:
        self.statuses.append(status)

    def finish(self) -> None:
        try:
            contents = json.dumps([status.to_dict() for status in self.statuses], indent=2, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise ReportError("unable to marshal to JSON") from e
        print(contents, file=self.stream)


def create_reporter(config: BruvConfig, stream: Optional[TextIO] = None) -> Reporter:
    if config.use_json:
        return JsonReporter(stream)
    return TextReporter(config.urls, stream)
