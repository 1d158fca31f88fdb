"""Import orchestrator: fetch, map, submit."""

from datetime import datetime
from typing import List, Optional

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from ..api.clubhouse import ClubhouseClient
from ..api.exceptions import APIError
from ..config.config import Config, validate_settings
from ..errors import (
    BatchSubmissionError,
    ConfigurationError,
    FetchError,
    ProjectResolutionError,
)
from ..models.story import ClubhouseProject, Story
from ..utils.reporting import Reporter
from .fetcher import IssueFetcher
from .mapper import map_issue
from .submitter import BatchSubmitter


class ImportSummary(BaseModel):
    """Summary of one import run."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    repository: str = Field(..., description='Source repository')
    project_id: str = Field(..., description='Destination project ID')
    issues_fetched: int = Field(default=0, description='Issues retrieved')
    stories_mapped: int = Field(default=0, description='Stories built')
    stories_imported: int = Field(default=0, description='Stories confirmed created')
    batches_total: int = Field(default=0, description='Batches submitted')
    batches_failed: int = Field(default=0, description='Batches rejected')
    dry_run: bool = Field(default=False, description='Nothing was submitted')

    started_at: datetime = Field(default_factory=datetime.now)
    completed_at: Optional[datetime] = Field(default=None)

    error: Optional[Exception] = Field(
        default=None, description='Error that stopped the import'
    )
    batch_errors: List[BatchSubmissionError] = Field(default_factory=list)

    @property
    def aborted(self) -> bool:
        return self.error is not None


class ImportOrchestrator:
    """Sequences an import from a GitHub repository into a Clubhouse project."""

    def __init__(
        self,
        fetcher: IssueFetcher,
        clubhouse_client: ClubhouseClient,
        reporter: Optional[Reporter] = None,
    ):
        """Initialize import orchestrator.

        Args:
            fetcher: Source issue fetcher
            clubhouse_client: Destination client for lookup and creation
            reporter: Receives user-facing events
        """
        self.fetcher = fetcher
        self.clubhouse_client = clubhouse_client
        self.reporter = reporter or Reporter()
        self.logger = logger.bind(component='ImportOrchestrator')

    async def resolve_project(self, project_id: str) -> ClubhouseProject:
        """Look up the destination project.

        Raises:
            ProjectResolutionError: If Clubhouse does not return the project
        """
        try:
            return await self.clubhouse_client.get_project(project_id)
        except APIError as e:
            raise ProjectResolutionError(project_id) from e

    async def run(self, config: Config) -> ImportSummary:
        """Run a full import.

        Args:
            config: Import configuration

        Returns:
            Import summary; ``error`` is set when a stage aborted the run

        Raises:
            ConfigurationError: If required settings are missing, before any
                network call is made
        """
        violations = validate_settings(config)
        if violations:
            raise ConfigurationError(violations)

        repository = config.github.repository
        project_id = config.clubhouse.project_id
        summary = ImportSummary(
            repository=repository,
            project_id=project_id,
            dry_run=config.importer.dry_run,
        )

        try:
            project = await self.resolve_project(project_id)
        except ProjectResolutionError as e:
            self.reporter.error(str(e))
            return self._finish(summary, error=e)

        self.reporter.info('Retrieving issues from Github')
        try:
            issues = await self.fetcher.fetch(repository, config.github.state)
        except FetchError as e:
            self.reporter.error(str(e))
            return self._finish(summary, error=e)

        summary.issues_fetched = len(issues)
        self.reporter.success(f'Retrieved {len(issues)} issues from Github')

        stories: List[Story] = [map_issue(project.id, issue) for issue in issues]
        summary.stories_mapped = len(stories)

        if config.importer.dry_run:
            self.reporter.info(
                f'Dry run: {len(stories)} stories would be imported into Clubhouse'
            )
            return self._finish(summary)

        self.reporter.info('Importing issues into Clubhouse')
        submitter = BatchSubmitter(
            self.clubhouse_client,
            reporter=self.reporter,
            batch_size=config.importer.batch_size,
        )
        report = await submitter.submit(stories)

        summary.stories_imported = report.imported
        summary.batches_total = len(report.outcomes)
        summary.batches_failed = len(report.failed_batches)
        summary.batch_errors = report.errors
        self.reporter.success(f'Imported {report.imported} issues into Clubhouse')

        return self._finish(summary)

    def _finish(
        self, summary: ImportSummary, error: Optional[Exception] = None
    ) -> ImportSummary:
        summary.error = error
        summary.completed_at = datetime.now()
        self.logger.info(
            f'Import of {summary.repository} finished: '
            f'{summary.stories_imported}/{summary.stories_mapped} stories imported'
        )
        return summary
