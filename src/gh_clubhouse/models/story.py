"""Clubhouse story models."""

from enum import Enum
from typing import Any, Dict, List, Union

from pydantic import BaseModel, ConfigDict, Field


class StoryType(str, Enum):
    """Clubhouse story types."""

    BUG = 'bug'
    CHORE = 'chore'
    FEATURE = 'feature'


class StoryLabel(BaseModel):
    """Label attached to a created story."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description='Label name')
    color: str = Field(..., description='Hex color with leading #')


class Story(BaseModel):
    """Story submitted to the Clubhouse bulk-create endpoint."""

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    project_id: Union[int, str] = Field(..., description='Resolved Clubhouse project ID')
    story_type: StoryType = Field(..., description='Story type')
    name: str = Field(..., description='Story name')
    description: str = Field(default='', description='Story description')
    external_id: str = Field(..., description='Source issue URL')
    created_at: str = Field(..., description='ISO-8601 creation timestamp')
    updated_at: str = Field(..., description='ISO-8601 update timestamp')
    labels: List[StoryLabel] = Field(default_factory=list, description='Story labels')

    def to_payload(self) -> Dict[str, Any]:
        """Serialize for the bulk-create request body."""
        return self.model_dump()


class ClubhouseProject(BaseModel):
    """Subset of a Clubhouse project needed to create stories in it."""

    id: Union[int, str] = Field(..., description='Project ID')
    name: str = Field(default='', description='Project name')
