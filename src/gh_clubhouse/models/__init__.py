"""Data models for GitHub issues and Clubhouse stories."""

from .issue import Label, SourceIssue
from .story import ClubhouseProject, Story, StoryLabel, StoryType

__all__ = [
    'Label',
    'SourceIssue',
    'ClubhouseProject',
    'Story',
    'StoryLabel',
    'StoryType',
]
