"""GitHub issue models."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Label(BaseModel):
    """GitHub issue label."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description='Label name')
    color: str = Field(..., description='Hex color without the leading #')

    @field_validator('color')
    @classmethod
    def strip_hash(cls, v):
        """GitHub sends bare hex colors; tolerate a stray prefix."""
        return v.lstrip('#')


class SourceIssue(BaseModel):
    """GitHub issue as returned by the repository issue listing."""

    model_config = ConfigDict(frozen=True)

    url: str = Field(..., description='Canonical issue URL (html_url)')
    number: Optional[int] = Field(default=None, description='Issue number')
    title: str = Field(..., description='Issue title')
    body: Optional[str] = Field(default=None, description='Issue body')
    created_at: str = Field(..., description='ISO-8601 creation timestamp')
    updated_at: str = Field(..., description='ISO-8601 update timestamp')
    labels: List[Label] = Field(default_factory=list, description='Issue labels')
    is_pull_request: bool = Field(
        default=False, description='Listing item is a pull request'
    )

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'SourceIssue':
        """Build an issue from a raw GitHub API item.

        GitHub lists pull requests on the issues endpoint; those items carry
        a ``pull_request`` key.
        """
        return cls(
            url=data['html_url'],
            number=data.get('number'),
            title=data['title'],
            body=data.get('body'),
            created_at=data['created_at'],
            updated_at=data['updated_at'],
            labels=[
                Label(name=label['name'], color=label.get('color') or '')
                for label in data.get('labels') or []
            ],
            is_pull_request='pull_request' in data,
        )
