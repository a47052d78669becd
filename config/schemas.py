import os
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Literal, Dict, Any

from config.logging_config import LoggingConfig

DEFAULT_CACHE_DIR = "$HOME/.cache/bruv/"

OutputFormat = Literal["text", "json"]


@dataclass(frozen=True)
class BruvConfig:
    src: str
    dst: str
    urls: Tuple[str, ...]
    cache_dir: str = DEFAULT_CACHE_DIR
    output_format: OutputFormat = "text"
    keep_going: bool = False
    logging_config: LoggingConfig = field(default_factory=LoggingConfig)

    @property
    def resolved_cache_dir(self) -> str:
        return os.path.expanduser(os.path.expandvars(self.cache_dir))

    @property
    def use_json(self) -> bool:
        return self.output_format == "json"


@dataclass(frozen=True)
class Divergence:
    ahead: int
    behind: int

    @property
    def equal(self) -> bool:
        return self.ahead == 0 and self.behind == 0


@dataclass
class RepoStatus:
    url: str
    equal: bool = False
    status: str = ""
    commits: Optional[List[str]] = None
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.error is not None

    def to_dict(self) -> Dict[str, Any]:
        record: Dict[str, Any] = {
            "url": self.url,
            "equal": self.equal,
            "status": self.status,
            "commits": list(self.commits) if self.commits is not None else None,
        }
        if self.error is not None:
            record["error"] = self.error
        return record
