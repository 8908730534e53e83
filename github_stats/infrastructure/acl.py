from typing import Any, Dict, List

from pydantic import ValidationError

from github_stats.domain.exceptions import MalformedResponseError
from github_stats.domain.models import Release, RepositoryInfo, TrafficViews

class GitHubTranslator:
    """
    Anti-corruption layer that translates raw GitHub REST JSON responses into domain models.
    """

    @staticmethod
    def to_repository_info(raw_repo: Dict[str, Any]) -> RepositoryInfo:
        """
        Transforms the body of GET /repos/{owner}/{repo} into a RepositoryInfo.

        Args:
            raw_repo (Dict[str, Any]): The decoded JSON object.

        Returns:
            RepositoryInfo: Only the popularity counters are kept.
        """
        if not isinstance(raw_repo, dict):
            raise MalformedResponseError(f"Expected a repository object, got {type(raw_repo).__name__}.")
        try:
            return RepositoryInfo.model_validate(raw_repo)
        except ValidationError as e:
            raise MalformedResponseError(f"Unexpected repository payload: {e}") from e

    @staticmethod
    def to_releases(raw_releases: List[Dict[str, Any]]) -> List[Release]:
        """
        Transforms the body of GET /repos/{owner}/{repo}/releases into Release models.
        """
        if not isinstance(raw_releases, list):
            raise MalformedResponseError(f"Expected a list of releases, got {type(raw_releases).__name__}.")
        try:
            # GitHub sends "assets": null for some draft releases
            return [
                Release.model_validate({**raw, 'assets': raw.get('assets') or []})
                for raw in raw_releases
            ]
        except (ValidationError, AttributeError, TypeError) as e:
            raise MalformedResponseError(f"Unexpected releases payload: {e}") from e

    @staticmethod
    def to_traffic_views(raw_views: Dict[str, Any]) -> TrafficViews:
        if not isinstance(raw_views, dict):
            raise MalformedResponseError(f"Expected a traffic views object, got {type(raw_views).__name__}.")
        try:
            return TrafficViews.model_validate({**raw_views, 'views': raw_views.get('views') or []})
        except ValidationError as e:
            raise MalformedResponseError(f"Unexpected traffic views payload: {e}") from e
