"""Import engine - builds clients from configuration and runs the import."""

from typing import Optional

from loguru import logger

from ..api.clubhouse import ClubhouseClient
from ..api.github import GitHubClient
from ..config.config import Config, validate_settings
from ..errors import ConfigurationError
from ..utils.reporting import Reporter
from .fetcher import IssueFetcher
from .orchestrator import ImportOrchestrator, ImportSummary


class ImportEngine:
    """Main entry point that wires clients, fetcher and orchestrator together."""

    def __init__(self, config: Config, reporter: Optional[Reporter] = None):
        """Initialize import engine.

        Args:
            config: Import configuration

        Raises:
            ConfigurationError: If required settings are missing
        """
        violations = validate_settings(config)
        if violations:
            raise ConfigurationError(violations)

        self.config = config
        self.reporter = reporter or Reporter()
        self.logger = logger.bind(component='ImportEngine')

        self.github_client = GitHubClient(config.github)
        self.clubhouse_client = ClubhouseClient(config.clubhouse)

        self.orchestrator = ImportOrchestrator(
            IssueFetcher(self.github_client),
            self.clubhouse_client,
            reporter=self.reporter,
        )

    async def run(self) -> ImportSummary:
        """Execute the import.

        Returns:
            Import summary
        """
        self.logger.info(
            f'Starting import of {self.config.github.repository} into '
            f'Clubhouse project {self.config.clubhouse.project_id}'
        )
        try:
            return await self.orchestrator.run(self.config)
        finally:
            self.close()

    def test_connectivity(self) -> None:
        """Test connectivity to GitHub and Clubhouse.

        Raises:
            ConnectionError: If either service rejects the connection
        """
        self.logger.info('Testing connectivity to GitHub and Clubhouse')

        if not self.github_client.test_connection():
            raise ConnectionError('Cannot connect to GitHub')

        if not self.clubhouse_client.test_connection():
            raise ConnectionError('Cannot connect to Clubhouse')

        self.logger.info('Connectivity tests passed')

    def close(self) -> None:
        self.github_client.close()
        self.clubhouse_client.close()
