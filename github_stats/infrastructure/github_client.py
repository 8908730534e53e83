import aiohttp
import asyncio
import logging
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import quote, urlsplit, urlunsplit

from github_stats.domain.exceptions import (
    AuthorizationError,
    GitHubHTTPError,
    MalformedResponseError,
    TransportError,
)
from github_stats.domain.models import Release, RepositoryInfo, TrafficViews
from github_stats.infrastructure.acl import GitHubTranslator

logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = "https://api.github.com/"
ENTERPRISE_API_PATH = "api/v3/"
DEFAULT_TIMEOUT_SECONDS = 10
RELEASES_PAGE_SIZE = 100


def resolve_base_url(api_base_url: str) -> str:
    """
    Normalizes the configured API base URL.

    An empty URL selects the public API. Any other URL is treated as a GitHub
    Enterprise server: it gets a trailing slash and, unless it already points at
    the API (".../api/v3/" or an "api." host), the "api/v3/" prefix.
    """
    if not api_base_url:
        return DEFAULT_API_BASE_URL

    parts = urlsplit(api_base_url)
    path = parts.path if parts.path.endswith("/") else parts.path + "/"
    host = parts.hostname or ""
    if not path.endswith("/" + ENTERPRISE_API_PATH) and not host.startswith("api.") and ".api." not in host:
        path += ENTERPRISE_API_PATH
    return urlunsplit((parts.scheme, parts.netloc, path, parts.query, parts.fragment))


class GitHubRestClient:
    """
    Read-only client for the three GitHub REST endpoints the collector needs.
    Handles authentication headers, timeouts and the mapping of failures onto
    the collector's exception types. It never retries.
    """

    def __init__(self, token: str = "", api_base_url: str = "", timeout: int = DEFAULT_TIMEOUT_SECONDS):
        self.headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": "github-stats-collector",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if token:
            self.headers["Authorization"] = f"Bearer {token}"
        self.base_url = resolve_base_url(api_base_url)
        self.timeout = aiohttp.ClientTimeout(total=timeout, sock_read=timeout)

    def _repo_url(self, owner: str, name: str, *path: str) -> str:
        segments = ["repos", quote(owner, safe=""), quote(name, safe=""), *path]
        return self.base_url + "/".join(segments)

    async def fetch_repository_info(self, session: aiohttp.ClientSession, owner: str, name: str) -> RepositoryInfo:
        data, _ = await self._get_json(session, self._repo_url(owner, name))
        return GitHubTranslator.to_repository_info(data)

    async def fetch_releases(self, session: aiohttp.ClientSession, owner: str, name: str) -> List[Release]:
        """
        Fetches every release of a repository, following the Link header
        pagination until the last page.
        """
        releases: List[Release] = []
        url: Optional[str] = self._repo_url(owner, name, "releases")
        params: Optional[Dict[str, Any]] = {"per_page": RELEASES_PAGE_SIZE}

        while url:
            data, next_url = await self._get_json(session, url, params)
            releases.extend(GitHubTranslator.to_releases(data))
            # The next link already carries the query string
            url, params = next_url, None

        return releases

    async def fetch_traffic_views(self, session: aiohttp.ClientSession, owner: str, name: str) -> TrafficViews:
        """
        Fetches the per-day traffic views. GitHub only serves this endpoint to
        tokens with push access to the repository.
        """
        data, _ = await self._get_json(session, self._repo_url(owner, name, "traffic", "views"), {"per": "day"})
        return GitHubTranslator.to_traffic_views(data)

    async def _get_json(
        self,
        session: aiohttp.ClientSession,
        url: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> Tuple[Any, Optional[str]]:
        """
        Issues a single GET request.

        Returns:
            Tuple of (decoded JSON body, URL of the next page or None).
        """
        logger.debug("GET %s params=%s", url, params)
        try:
            async with session.get(url, params=params, headers=self.headers, timeout=self.timeout) as response:
                if response.status in {401, 403}:
                    raise AuthorizationError(response.status, str(response.url), await self._error_message(response))
                if not 200 <= response.status < 300:
                    raise GitHubHTTPError(response.status, str(response.url), await self._error_message(response))

                try:
                    data = await response.json(content_type=None)
                except ValueError as e:
                    raise MalformedResponseError(f"Response from {response.url} is not valid JSON: {e}") from e

                next_link = response.links.get("next")
                next_url = str(next_link.get("url")) if next_link else None
                return data, next_url

        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransportError(f"Request to {url} failed: {e!r}") from e

    @staticmethod
    async def _error_message(response: aiohttp.ClientResponse) -> Optional[str]:
        # GitHub error bodies look like {"message": "...", "documentation_url": "..."}
        try:
            body = await response.json(content_type=None)
        except (ValueError, aiohttp.ClientError):
            return None
        if isinstance(body, dict):
            return body.get("message")
        return None
