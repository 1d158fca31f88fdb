"""Clubhouse REST API client."""

from typing import Any, Dict, List

from loguru import logger
from pydantic import ValidationError

from ..config.config import ClubhouseConfig
from ..models.story import ClubhouseProject, Story
from .client import APIClient
from .exceptions import AuthenticationError, APIError


class ClubhouseClient(APIClient):
    """Clubhouse API client.

    Clubhouse authenticates with the API token passed as the ``token`` query
    parameter on every request.
    """

    def __init__(self, config: ClubhouseConfig):
        """Initialize Clubhouse client.

        Args:
            config: Clubhouse configuration
        """
        if not config.token:
            raise AuthenticationError('No Clubhouse token provided')

        super().__init__(
            config.api_url,
            params={'token': config.token},
            timeout=config.timeout,
        )
        self.config = config
        logger.debug(f'Initialized Clubhouse client for {config.api_url}')

    async def get_project(self, project_id: str) -> ClubhouseProject:
        """Look up a project by its ID.

        Raises:
            APIError: If the project does not exist or the token is rejected
        """
        response = await self.get_async(f'/projects/{project_id}')
        if not isinstance(response.data, dict):
            raise APIError(
                f'Unexpected project payload for {project_id}',
                status_code=response.status_code,
                response_data=response.data,
            )
        try:
            return ClubhouseProject(**response.data)
        except ValidationError as e:
            raise APIError(
                f'Unexpected project payload for {project_id}: {e}',
                status_code=response.status_code,
                response_data=response.data,
            )

    async def create_stories(self, stories: List[Story]) -> List[Dict[str, Any]]:
        """Create stories with a single bulk request.

        Returns:
            The stories Clubhouse reports as created
        """
        response = await self.post_async(
            '/stories/bulk',
            data={'stories': [story.to_payload() for story in stories]},
        )
        if response.data is None:
            return []
        if not isinstance(response.data, list):
            raise APIError(
                'Unexpected bulk-create payload',
                status_code=response.status_code,
                response_data=response.data,
            )
        return response.data

    def test_connection(self) -> bool:
        """Test connection to Clubhouse with the configured token."""
        try:
            response = self.get('/member')
            return response.success
        except APIError as e:
            logger.error(f'Clubhouse connection test failed: {e}')
            return False
