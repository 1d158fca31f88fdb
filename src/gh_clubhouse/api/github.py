"""GitHub REST API client."""

from typing import Any, Dict, List, Optional

from loguru import logger

from ..config.config import GitHubConfig
from .client import APIClient
from .exceptions import AuthenticationError, APIError


class GitHubClient(APIClient):
    """GitHub API client authenticated with a personal access token."""

    def __init__(self, config: GitHubConfig):
        """Initialize GitHub client.

        Args:
            config: GitHub configuration
        """
        if not config.token:
            raise AuthenticationError('No GitHub token provided')

        super().__init__(
            config.api_url,
            headers={
                'Authorization': f'token {config.token}',
                'Accept': 'application/vnd.github+json',
            },
            timeout=config.timeout,
        )
        self.config = config
        logger.debug(f'Initialized GitHub client for {config.api_url}')

    @staticmethod
    def _has_next_page(headers: Dict[str, str]) -> bool:
        """Whether the Link header advertises another page.

        A response without any Link header is a single page listing.
        """
        link = headers.get('Link') or headers.get('link')
        if link is None:
            return True
        return 'rel="next"' in link

    async def get_paginated_async(
        self,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        per_page: int = 100,
    ) -> List[Dict[str, Any]]:
        """Get all pages of a paginated endpoint.

        Pages are requested one after another; the listing stops on an empty
        page, a short page, or when GitHub stops advertising a next page.

        Args:
            endpoint: API endpoint
            params: Query parameters
            per_page: Items per page

        Returns:
            List of all items from all pages
        """
        all_items = []
        page = 1
        params = dict(params or {})
        params['per_page'] = per_page

        while True:
            params['page'] = page
            response = await self.get_async(endpoint, params=dict(params))

            items = response.data
            if not items:
                break
            if not isinstance(items, list):
                raise APIError(
                    f'Unexpected listing payload from {endpoint}',
                    status_code=response.status_code,
                    response_data=items,
                )

            all_items.extend(items)

            if len(items) < per_page or not self._has_next_page(response.headers):
                break

            page += 1

        logger.debug(f'Retrieved {len(all_items)} items from {endpoint}')
        return all_items

    async def list_issues(
        self, owner: str, repo: str, state: str = 'open'
    ) -> List[Dict[str, Any]]:
        """List every issue (and pull request) of a repository."""
        return await self.get_paginated_async(
            f'/repos/{owner}/{repo}/issues',
            params={'state': state},
            per_page=self.config.per_page,
        )

    def test_connection(self) -> bool:
        """Test connection to GitHub with the configured token."""
        try:
            response = self.get('/user')
            return response.success
        except APIError as e:
            logger.error(f'GitHub connection test failed: {e}')
            return False
