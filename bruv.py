import argparse
import sys
from typing import Iterable, List, Optional, TextIO

from config.config_loader import finalize_config
from config.logging_config import LOG_LEVELS, LoggingConfig
from config.schemas import BruvConfig
from core.cache_manager import CacheInitializer
from core.commit_lister import CommitLister
from core.divergence_analyzer import DivergenceAnalyzer
from core.errors import BruvError, ConfigError, format_error
from core.remote_registry import RemoteRegistry
from core.reporter import create_reporter
from core.workflow import ComparisonWorkflow
from utils.command_executor import CommandExecutor
from utils.custom_logger import Logger, setup_logging
from utils.git_utils import GitBackend, GitOperator

__version__ = "1.0.0"

logger = Logger("bruv")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="bruv",
        usage="%(prog)s [options] <src> <dst> <url>...\n"
              "       %(prog)s [options] <src> <dst> -i",
        description="Compare two branches across a list of remote git repositories.",
    )
    parser.add_argument('src', help='source branch name')
    parser.add_argument('dst', help='destination branch name')
    parser.add_argument('urls', nargs='*', metavar='url', help='repository URL')
    parser.add_argument('-i', '--stdin', action='store_true', default=False,
                        help='use stdin as list of repositories')
    parser.add_argument('-c', '--cache', dest='cache_dir', default=None,
                        help='use this directory for cache [default: $HOME/.cache/bruv/]')
    parser.add_argument('-j', '--json', dest='json', action='store_true', default=None,
                        help='output in JSON')
    parser.add_argument('-k', '--keep-going', dest='keep_going', action='store_true', default=None,
                        help='report failing repositories and continue with the rest')
    parser.add_argument('--config', dest='config_path', default=None,
                        help='YAML or JSON file with default options')
    parser.add_argument('--log-level', dest='log_level', default=None, type=str.upper, choices=LOG_LEVELS,
                        help='stderr log level [default: WARNING]')
    parser.add_argument('--log-file', dest='log_file', default=None,
                        help='also write a rotating debug log to this file')
    parser.add_argument('--version', action='version', version=f"%(prog)s {__version__}")

    args = parser.parse_args(argv)
    if not args.urls and not args.stdin:
        parser.error("at least one <url> or -i/--stdin is required")
    return args


def read_urls(stream: TextIO) -> List[str]:
    urls = []
    for line in stream:
        line = line.rstrip("\r\n")
        if line:
            urls.append(line)
    return urls


def _first_set(*values):
    for value in values:
        if value is not None:
            return value
    return None


def _file_flag(file_config, key: str) -> Optional[bool]:
    value = file_config.get(key)
    if value is not None and not isinstance(value, bool):
        raise ConfigError(f"config option '{key}' must be true or false, got {value!r}")
    return value


def _file_level(logging_section) -> Optional[str]:
    level = logging_section.get("level")
    if level is None:
        return None
    if not isinstance(level, str) or level.upper() not in LOG_LEVELS:
        raise ConfigError(f"config option 'logging.level' must be one of {', '.join(LOG_LEVELS)}, got {level!r}")
    return level.upper()


def build_config(args: argparse.Namespace, urls: Iterable[str]) -> BruvConfig:
    file_config = finalize_config(args.config_path)
    logging_section = file_config.get("logging") or {}
    if not isinstance(logging_section, dict):
        raise ConfigError("config option 'logging' must be a mapping")
    cache_dir = _first_set(args.cache_dir, file_config.get("cache_dir"))
    if not isinstance(cache_dir, str):
        raise ConfigError(f"config option 'cache_dir' must be a path, got {cache_dir!r}")
    defaults = LoggingConfig()

    logging_config = LoggingConfig(
        log_level=_first_set(args.log_level, _file_level(logging_section), defaults.log_level),
        log_file=_first_set(args.log_file, logging_section.get("file")),
        log_rotation=_first_set(logging_section.get("rotation"), defaults.log_rotation),
        log_retention=_first_set(logging_section.get("retention"), defaults.log_retention),
        log_compression=_first_set(logging_section.get("compression"), defaults.log_compression),
    )
    use_json = _first_set(args.json, _file_flag(file_config, "json"), False)
    return BruvConfig(
        src=args.src,
        dst=args.dst,
        urls=tuple(urls),
        cache_dir=cache_dir,
        output_format="json" if use_json else "text",
        keep_going=_first_set(args.keep_going, _file_flag(file_config, "keep_going"), False),
        logging_config=logging_config,
    )


def create_workflow(config: BruvConfig, git_backend: Optional[GitBackend] = None, stream: Optional[TextIO] = None) -> ComparisonWorkflow:
    command_executor = CommandExecutor()
    if git_backend is None:
        git_backend = GitOperator(command_executor)
    commit_lister = CommitLister(git_backend)
    return ComparisonWorkflow(
        config=config,
        cache_initializer=CacheInitializer(git_backend, command_executor),
        remote_registry=RemoteRegistry(git_backend),
        analyzer=DivergenceAnalyzer(git_backend, commit_lister),
        reporter=create_reporter(config, stream),
    )


def main(argv: Optional[List[str]] = None, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None, git_backend: Optional[GitBackend] = None) -> int:
    args = parse_args(argv)
    try:
        urls = list(args.urls)
        if args.stdin:
            urls.extend(read_urls(stdin if stdin is not None else sys.stdin))

        config = build_config(args, urls)
        setup_logging(config.logging_config)
        logger.debug(f"Running with {config}")

        statuses = create_workflow(config, git_backend, stdout).run()
    except BruvError as e:
        logger.critical(format_error(e))
        return 1

    if any(status.failed for status in statuses):
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
