"""Import failure taxonomy.

Each stage of an import fails in its own way and each failure kind is a
separate class, so callers (and tests) can tell a rejected batch from an
unknown project without parsing messages.
"""

from typing import Any, List, Optional


class GhClubhouseError(Exception):
    """Base exception for import failures."""

    pass


class ConfigurationError(GhClubhouseError):
    """One or more required settings are missing or invalid."""

    def __init__(self, violations: List[Any]):
        """Initialize configuration error.

        Args:
            violations: Every violated configuration rule
        """
        self.violations = list(violations)
        super().__init__(
            'Invalid configuration: '
            + ', '.join(str(getattr(v, 'value', v)) for v in self.violations)
        )


class ProjectResolutionError(GhClubhouseError):
    """The destination Clubhouse project could not be resolved."""

    def __init__(self, project_id: Any, message: str = ''):
        self.project_id = project_id
        super().__init__(
            message or f'Clubhouse Project ID {project_id} could not be found'
        )


class FetchError(GhClubhouseError):
    """Listing issues from the source repository failed."""

    def __init__(self, repository: str, message: str):
        self.repository = repository
        super().__init__(f'Failed to fetch issues from {repository}: {message}')


class BatchSubmissionError(GhClubhouseError):
    """A single batch of stories was rejected or failed in transport."""

    def __init__(
        self,
        batch_index: int,
        batch_size: int,
        message: str,
        status_code: Optional[int] = None,
        response_data: Optional[Any] = None,
    ):
        """Initialize batch submission error.

        Args:
            batch_index: 1-based position of the batch in submission order
            batch_size: Number of stories in the batch
            message: Underlying failure message
            status_code: HTTP status code, if the server answered
            response_data: Decoded error body, if any
        """
        self.batch_index = batch_index
        self.batch_size = batch_size
        self.status_code = status_code
        self.response_data = response_data
        super().__init__(f'Failed to import batch #{batch_index}: \n {message}')
