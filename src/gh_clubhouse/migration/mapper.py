"""Issue to story mapping."""

from typing import Sequence, Union

from ..models.issue import Label, SourceIssue
from ..models.story import Story, StoryLabel, StoryType


def get_story_type(labels: Sequence[Label]) -> StoryType:
    """Derive a story type from issue labels.

    Any label mentioning ``bug`` wins over one mentioning ``chore``; issues
    without either become features.
    """
    names = [label.name.lower() for label in labels]
    if any('bug' in name for name in names):
        return StoryType.BUG
    if any('chore' in name for name in names):
        return StoryType.CHORE
    return StoryType.FEATURE


def map_issue(project_id: Union[int, str], issue: SourceIssue) -> Story:
    """Convert a GitHub issue into a Clubhouse story for ``project_id``."""
    return Story(
        project_id=project_id,
        story_type=get_story_type(issue.labels),
        name=issue.title,
        description=issue.body or '',
        external_id=issue.url,
        created_at=issue.created_at,
        updated_at=issue.updated_at,
        labels=[
            StoryLabel(name=label.name, color=f'#{label.color}')
            for label in issue.labels
        ],
    )
