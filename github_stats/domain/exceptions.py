from typing import Optional


class CollectorException(Exception):
    """Base exception for all collector-related errors."""
    pass

class ConfigurationError(CollectorException):
    """Raised when the collector configuration cannot be used (e.g. no repositories)."""
    pass

class InvalidIdentifierError(CollectorException):
    """Raised when a repository identifier is not of the form 'owner/name'."""
    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"Invalid repository identifier '{identifier}'. Expected 'owner/name'.")

class TransportError(CollectorException):
    """Raised when a request fails before a response is received (network, timeout)."""
    pass

class GitHubHTTPError(CollectorException):
    """Raised when the GitHub API answers with a non-2xx status."""
    def __init__(self, status: int, url: str, message: Optional[str] = None):
        self.status = status
        self.url = url
        detail = f": {message}" if message else ""
        super().__init__(f"GitHub API returned HTTP {status} for {url}{detail}")

class AuthorizationError(GitHubHTTPError):
    """Raised on 401/403, e.g. traffic views requested with a missing or insufficient token."""
    pass

class MalformedResponseError(CollectorException):
    """Raised when a response body is not JSON or does not have the expected shape."""
    pass
