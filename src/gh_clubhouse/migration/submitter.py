"""Batched story submission to Clubhouse."""

import asyncio
from typing import List, Optional, Sequence, TypeVar

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from ..api.clubhouse import ClubhouseClient
from ..api.exceptions import APIError
from ..config.config import MAX_BATCH_SIZE
from ..errors import BatchSubmissionError
from ..models.story import Story
from ..utils.reporting import Reporter

T = TypeVar('T')


def chunk(items: Sequence[T], size: int = MAX_BATCH_SIZE) -> List[List[T]]:
    """Split ``items`` into contiguous lists of at most ``size`` elements."""
    if size <= 0:
        raise ValueError('Chunk size must be positive')
    return [list(items[i : i + size]) for i in range(0, len(items), size)]


class BatchOutcome(BaseModel):
    """Result of submitting one batch."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    index: int = Field(..., description='1-based batch position')
    size: int = Field(..., description='Stories in the batch')
    created: int = Field(default=0, description='Stories Clubhouse confirmed')
    error: Optional[BatchSubmissionError] = Field(
        default=None, description='Failure, if the batch was not imported'
    )

    @property
    def success(self) -> bool:
        return self.error is None


class BatchSubmissionReport(BaseModel):
    """Per-batch outcomes of one submission run, in batch order."""

    outcomes: List[BatchOutcome] = Field(default_factory=list)

    @property
    def imported(self) -> int:
        return sum(outcome.created for outcome in self.outcomes)

    @property
    def failed_batches(self) -> List[BatchOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.success]

    @property
    def errors(self) -> List[BatchSubmissionError]:
        return [outcome.error for outcome in self.failed_batches]


class BatchSubmitter:
    """Submits stories in bounded batches, all batches in flight at once.

    A failed batch is reported and counted as zero imported stories; it
    never stops its sibling batches.
    """

    def __init__(
        self,
        client: ClubhouseClient,
        reporter: Optional[Reporter] = None,
        batch_size: int = MAX_BATCH_SIZE,
    ):
        """Initialize batch submitter.

        Args:
            client: Authenticated Clubhouse client
            reporter: Receives one error event per failed batch
            batch_size: Maximum stories per bulk request
        """
        if not 1 <= batch_size <= MAX_BATCH_SIZE:
            raise ValueError(f'Batch size must be between 1 and {MAX_BATCH_SIZE}')

        self.client = client
        self.reporter = reporter or Reporter()
        self.batch_size = batch_size
        self.logger = logger.bind(component='BatchSubmitter')

    async def _submit_batch(self, index: int, batch: List[Story]) -> BatchOutcome:
        try:
            created = await self.client.create_stories(batch)
        except APIError as e:
            error = BatchSubmissionError(
                index,
                len(batch),
                str(e),
                status_code=e.status_code,
                response_data=e.response_data,
            )
            self.reporter.error(str(error))
            return BatchOutcome(index=index, size=len(batch), error=error)

        self.logger.debug(f'Batch #{index}: {len(created)}/{len(batch)} created')
        return BatchOutcome(index=index, size=len(batch), created=len(created))

    async def submit(self, stories: Sequence[Story]) -> BatchSubmissionReport:
        """Submit every story and collect per-batch outcomes.

        Args:
            stories: Stories in the order they should be created

        Returns:
            Outcomes ordered by batch index
        """
        batches = chunk(stories, self.batch_size)
        self.logger.info(f'Submitting {len(stories)} stories in {len(batches)} batches')

        outcomes = await asyncio.gather(
            *(
                self._submit_batch(index, batch)
                for index, batch in enumerate(batches, start=1)
            )
        )
        report = BatchSubmissionReport(outcomes=list(outcomes))

        self.logger.info(
            f'Imported {report.imported} of {len(stories)} stories, '
            f'{len(report.failed_batches)} batches failed'
        )
        return report

    async def submit_all(self, stories: Sequence[Story]) -> int:
        """Submit every story and return the number Clubhouse confirmed."""
        report = await self.submit(stories)
        return report.imported
