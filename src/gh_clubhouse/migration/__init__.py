"""Import pipeline: fetch issues, map them to stories, submit in batches."""

from .engine import ImportEngine
from .fetcher import IssueFetcher, split_repository
from .mapper import get_story_type, map_issue
from .orchestrator import ImportOrchestrator, ImportSummary
from .submitter import BatchOutcome, BatchSubmissionReport, BatchSubmitter, chunk

__all__ = [
    'ImportEngine',
    'IssueFetcher',
    'split_repository',
    'get_story_type',
    'map_issue',
    'ImportOrchestrator',
    'ImportSummary',
    'BatchOutcome',
    'BatchSubmissionReport',
    'BatchSubmitter',
    'chunk',
]
