"""Source issue retrieval from GitHub."""

from typing import List, Tuple

from loguru import logger

from ..api.exceptions import APIError
from ..api.github import GitHubClient
from ..config.config import ISSUE_STATES
from ..errors import FetchError
from ..models.issue import SourceIssue


def split_repository(repository: str) -> Tuple[str, str]:
    """Split ``owner/repo`` on the first slash.

    Raises:
        FetchError: If either half is missing
    """
    owner, _, repo = repository.partition('/')
    if not owner or not repo:
        raise FetchError(repository, 'repository must be given as owner/repo')
    return owner, repo


class IssueFetcher:
    """Lists the issues of a GitHub repository, skipping pull requests."""

    def __init__(self, client: GitHubClient):
        """Initialize issue fetcher.

        Args:
            client: Authenticated GitHub client
        """
        self.client = client
        self.logger = logger.bind(component='IssueFetcher')

    async def fetch(self, repository: str, state: str = 'open') -> List[SourceIssue]:
        """Fetch every issue of ``repository`` in the given state.

        Args:
            repository: Repository as ``owner/repo``
            state: ``open``, ``closed`` or ``all`` (any case)

        Returns:
            Issues in listing order, pull requests excluded

        Raises:
            FetchError: On any listing failure; no partial results
        """
        owner, repo = split_repository(repository)
        state = (state or '').lower()
        if state not in ISSUE_STATES:
            raise FetchError(repository, f'unsupported issue state {state!r}')

        self.logger.info(f'Listing {state} issues of {owner}/{repo}')

        try:
            items = await self.client.list_issues(owner, repo, state=state)
            issues = [SourceIssue.from_api(item) for item in items]
        except (APIError, KeyError, ValueError) as e:
            raise FetchError(repository, str(e)) from e

        result = [issue for issue in issues if not issue.is_pull_request]
        self.logger.info(
            f'Retrieved {len(result)} issues from {repository} '
            f'({len(issues) - len(result)} pull requests skipped)'
        )
        return result
