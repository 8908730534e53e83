import logging
from typing import Iterable, List, Optional, Tuple

import aiohttp

from github_stats.application.ports import Accumulator, Logger
from github_stats.config import CollectorConfig
from github_stats.domain.exceptions import CollectorException, ConfigurationError, InvalidIdentifierError
from github_stats.domain.models import MetricRecord, Release, RepositorySnapshot, TrafficView
from github_stats.infrastructure.github_client import GitHubRestClient

logger = logging.getLogger(__name__)


def parse_identifier(identifier: str) -> Tuple[str, str]:
    """Splits 'owner/name' into its two parts."""
    parts = identifier.split("/")
    if len(parts) != 2 or not all(parts):
        raise InvalidIdentifierError(identifier)
    return parts[0], parts[1]


def total_download_count(releases: Iterable[Release]) -> int:
    return sum(asset.download_count for release in releases for asset in release.assets)


def latest_traffic_view(views: Iterable[TrafficView]) -> Optional[TrafficView]:
    """Returns the sample with the most recent timestamp, whatever the order of the list."""
    return max(views, key=lambda view: view.timestamp, default=None)


class CollectorService:
    """
    Runs collection cycles: for every configured repository, fetch the
    repository info, its releases and (with a token) its traffic views, reduce
    them to one MetricRecord and hand it to the accumulator.

    Repositories are processed one after the other. A failing repository is
    reported through the accumulator and does not stop the others.
    """

    def __init__(
            self,
            config: CollectorConfig,
            accumulator: Accumulator,
            github_client: Optional[GitHubRestClient] = None,
            log: Optional[Logger] = None,
    ):
        self.config = config
        self.accumulator = accumulator
        self.github_client = github_client or GitHubRestClient(
            token=config.access_token,
            api_base_url=config.api_base_url,
            timeout=config.timeout,
        )
        self.log = log or logger

    @property
    def collects_traffic(self) -> bool:
        # The traffic endpoint requires an authenticated user with push access
        return bool(self.config.access_token)

    async def gather(self) -> int:
        """
        Runs one collection cycle.

        Returns:
            int: The number of records emitted.

        Raises:
            ConfigurationError: If no repositories are configured. No request is made then.
        """
        if not self.config.repos:
            raise ConfigurationError("Empty repository list.")

        emitted = 0
        # Picks up HTTP(S)_PROXY and NO_PROXY from the environment
        async with aiohttp.ClientSession(trust_env=True) as session:
            for identifier in self.config.repos:
                try:
                    record = await self.collect(session, identifier)
                except CollectorException as e:
                    self.log.error("Failed to collect %s: %s", identifier, e)
                    self.accumulator.add_error(e)
                    continue

                self.accumulator.emit(record.name, record.tags, record.fields)
                emitted += 1

        self.log.info("Collected %d of %d repositories.", emitted, len(self.config.repos))
        return emitted

    async def collect(self, session: aiohttp.ClientSession, identifier: str) -> MetricRecord:
        """Builds the record of a single repository. Any failure propagates."""
        if self.config.debug:
            self.log.info("Processing repo: %s", identifier)

        owner, name = parse_identifier(identifier)
        info = await self.github_client.fetch_repository_info(session, owner, name)
        releases: List[Release] = await self.github_client.fetch_releases(session, owner, name)

        total_views = 0
        unique_views = 0
        if self.collects_traffic:
            traffic = await self.github_client.fetch_traffic_views(session, owner, name)
            latest = latest_traffic_view(traffic.views)
            if latest is not None:
                total_views = latest.count
                unique_views = latest.uniques
        elif self.config.debug:
            self.log.debug("No access token configured, skipping traffic views of %s.", identifier)

        snapshot = RepositorySnapshot(
            forks_count=info.forks_count,
            stargazers_count=info.stargazers_count,
            subscribers_count=info.subscribers_count,
            total_download_count=total_download_count(releases),
            total_views=total_views,
            unique_views=unique_views,
        )
        return MetricRecord.from_snapshot(identifier, snapshot)
