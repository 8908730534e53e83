import os
from typing import List, Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from github_stats.domain.exceptions import ConfigurationError

DESCRIPTION = "Gather GitHub repository stats"

SAMPLE_CONFIG = """\
## The repositories (<owner>/<repo>) to query, comma separated
GITHUB_REPOS=influxdata/telegraf
## The API base URL to use for API access (empty URL defaults to https://api.github.com/)
# GITHUB_API_BASE_URL=
## The Personal Access Token to use for API access (required for traffic views)
# GITHUB_TOKEN=
## The http timeout to use (in seconds)
# GITHUB_TIMEOUT=10
## Enable debug output
# GITHUB_DEBUG=false
"""

_TRUTHY = {"1", "true", "yes", "on"}


class CollectorConfig(BaseModel):
    """
    Settings of one collector instance. An empty repository list is accepted
    here and rejected when a cycle is gathered.
    """
    model_config = ConfigDict(frozen=True)

    repos: List[str] = Field(default_factory=list, description="Repository identifiers 'owner/name'")
    api_base_url: str = Field("", description="API base URL, empty for https://api.github.com/")
    access_token: str = Field("", description="Personal access token, enables traffic views")
    timeout: int = Field(10, gt=0, description="HTTP timeout in seconds")
    debug: bool = Field(False, description="Verbose logging")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "CollectorConfig":
        """
        Builds the configuration from GITHUB_* environment variables. When no
        mapping is given, a .env file is loaded into os.environ first.
        """
        if environ is None:
            load_dotenv()
            environ = os.environ

        repos = [repo.strip() for repo in environ.get("GITHUB_REPOS", "").split(",") if repo.strip()]
        values = {
            "repos": repos,
            "api_base_url": environ.get("GITHUB_API_BASE_URL", ""),
            "access_token": environ.get("GITHUB_TOKEN", ""),
            "debug": environ.get("GITHUB_DEBUG", "").strip().lower() in _TRUTHY,
        }
        if environ.get("GITHUB_TIMEOUT"):
            values["timeout"] = environ["GITHUB_TIMEOUT"]
        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid collector configuration: {e}") from e
