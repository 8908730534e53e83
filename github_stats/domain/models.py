from typing import Dict, List
from pydantic import AwareDatetime, BaseModel, Field, ConfigDict

METRIC_NAME = "repository_info"
REPOSITORY_TAG = "repository"


class RepositoryInfo(BaseModel):
    """
    Popularity counters of a single repository, as reported by the repository endpoint.
    """
    # Enforces immutability: once created, fields cannot be modified.
    model_config = ConfigDict(frozen=True)

    forks_count: int = Field(0, ge=0, description="Number of forks")
    stargazers_count: int = Field(0, ge=0, description="Number of stargazers")
    subscribers_count: int = Field(0, ge=0, description="Number of watchers")


class ReleaseAsset(BaseModel):
    model_config = ConfigDict(frozen=True)

    download_count: int = Field(0, ge=0, description="How often the asset was downloaded")


class Release(BaseModel):
    model_config = ConfigDict(frozen=True)

    assets: List[ReleaseAsset] = Field(default_factory=list)


class TrafficView(BaseModel):
    """One per-day traffic sample."""
    model_config = ConfigDict(frozen=True)

    timestamp: AwareDatetime
    count: int = Field(0, ge=0)
    uniques: int = Field(0, ge=0)


class TrafficViews(BaseModel):
    model_config = ConfigDict(frozen=True)

    count: int = Field(0, ge=0, description="Total views over the reported period")
    uniques: int = Field(0, ge=0, description="Unique visitors over the reported period")
    views: List[TrafficView] = Field(default_factory=list)


class RepositorySnapshot(BaseModel):
    """
    Aggregated figures of one repository for one collection cycle.
    """
    model_config = ConfigDict(frozen=True)

    forks_count: int = Field(..., ge=0)
    stargazers_count: int = Field(..., ge=0)
    subscribers_count: int = Field(..., ge=0)
    total_download_count: int = Field(..., ge=0, description="Sum over all assets of all releases")
    total_views: int = Field(0, ge=0, description="Views of the most recent traffic sample")
    unique_views: int = Field(0, ge=0, description="Unique visitors of the most recent traffic sample")


class MetricRecord(BaseModel):
    """
    The record emitted to the host accumulator for a single repository.
    """
    model_config = ConfigDict(frozen=True)

    name: str = METRIC_NAME
    tags: Dict[str, str]
    fields: Dict[str, int]

    @classmethod
    def from_snapshot(cls, identifier: str, snapshot: RepositorySnapshot) -> "MetricRecord":
        return cls(tags={REPOSITORY_TAG: identifier}, fields=snapshot.model_dump())
