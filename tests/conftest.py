"""Shared fixtures for importer tests."""

import sys

import pytest
from loguru import logger

from gh_clubhouse.config.config import ClubhouseConfig, Config, GitHubConfig
from gh_clubhouse.models.issue import SourceIssue
from gh_clubhouse.models.story import Story, StoryType


def issue_data(number, labels=None, pull_request=False, body='Body text'):
    """Raw GitHub listing item."""
    data = {
        'number': number,
        'html_url': f'https://github.com/octo/repo/issues/{number}',
        'title': f'Issue {number}',
        'body': body,
        'created_at': '2019-01-02T03:04:05Z',
        'updated_at': '2019-02-03T04:05:06Z',
        'labels': [{'name': name, 'color': color} for name, color in (labels or [])],
    }
    if pull_request:
        data['pull_request'] = {
            'url': f'https://api.github.com/repos/octo/repo/pulls/{number}'
        }
    return data


def make_story(number, project_id=42):
    return Story(
        project_id=project_id,
        story_type=StoryType.FEATURE,
        name=f'Issue {number}',
        description='',
        external_id=f'https://github.com/octo/repo/issues/{number}',
        created_at='2019-01-02T03:04:05Z',
        updated_at='2019-02-03T04:05:06Z',
    )


@pytest.fixture(autouse=True)
def reset_logging():
    """CliRunner closes the streams the CLI attaches loguru sinks to."""
    yield
    logger.remove()
    logger.add(sys.stderr, level='WARNING')


@pytest.fixture
def source_issue():
    return SourceIssue.from_api(issue_data(1, labels=[('bug', 'ff0000')]))


@pytest.fixture
def config():
    return Config(
        github=GitHubConfig(token='gh-token', repository='octo/repo', state='open'),
        clubhouse=ClubhouseConfig(token='ch-token', project_id='42'),
    )
