"""API clients for GitHub and Clubhouse."""

from .client import APIClient, APIResponse
from .clubhouse import ClubhouseClient
from .exceptions import APIError, AuthenticationError, NotFoundError, RateLimitError
from .github import GitHubClient

__all__ = [
    'APIClient',
    'APIResponse',
    'ClubhouseClient',
    'GitHubClient',
    'APIError',
    'AuthenticationError',
    'NotFoundError',
    'RateLimitError',
]
