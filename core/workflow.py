from typing import List
from config.schemas import BruvConfig, RepoStatus
from core.cache_manager import CacheInitializer
from core.remote_registry import RemoteRegistry
from core.divergence_analyzer import DivergenceAnalyzer
from core.reporter import Reporter
from core.errors import BruvError, format_error
from utils.custom_logger import Logger


class ComparisonWorkflow:

    def __init__(
        self,
        config: BruvConfig,
        cache_initializer: CacheInitializer,
        remote_registry: RemoteRegistry,
        analyzer: DivergenceAnalyzer,
        reporter: Reporter,
    ) -> None:
        self.config: BruvConfig = config
        self.cache_initializer: CacheInitializer = cache_initializer
        self.remote_registry: RemoteRegistry = remote_registry
        self.analyzer: DivergenceAnalyzer = analyzer
        self.reporter: Reporter = reporter
        self.logger: Logger = Logger(self.__class__.__name__)

    def compare_repository(self, cache_dir: str, url: str) -> RepoStatus:
        remote_name = self.remote_registry.ensure_remote(cache_dir, url)
        self.remote_registry.update_remote(cache_dir, remote_name, url)
        return self.analyzer.analyze(cache_dir, remote_name, url, self.config.src, self.config.dst)

    def run(self) -> List[RepoStatus]:
        """Compare every configured repository in input order.

        The first failure propagates unless keep_going is set, in which case
        it is recorded on that repository's entry and the loop moves on.
        """
        cache_dir = self.config.resolved_cache_dir
        self.cache_initializer.ensure_cache(cache_dir)

        self.logger.info(f"Comparing {self.config.src} with {self.config.dst} across {len(self.config.urls)} repositories")
        statuses: List[RepoStatus] = []
        for url in self.config.urls:
            try:
                status = self.compare_repository(cache_dir, url)
            except BruvError as e:
                if not self.config.keep_going:
                    raise
                self.logger.error(f"Skipping {url}: {format_error(e)}")
                status = RepoStatus(url=url, status="failed", error=format_error(e))
            statuses.append(status)
            self.reporter.emit(status)

        self.reporter.finish()
        failed = sum(1 for status in statuses if status.failed)
        if failed:
            self.logger.warning(f"{failed} of {len(statuses)} repositories failed")
        return statuses
