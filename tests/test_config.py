"""Tests for configuration management."""

import os
import tempfile
from unittest.mock import patch

import pytest
import yaml

from gh_clubhouse.config.config import (
    ClubhouseConfig,
    Config,
    ConfigViolation,
    GitHubConfig,
    ImportConfig,
    validate_settings,
)


class TestValidateSettings:
    """Test up-front configuration rules."""

    def test_valid(self, config):
        assert validate_settings(config) == []

    def test_missing_project_only(self, config):
        config.clubhouse.project_id = ''

        assert validate_settings(config) == [ConfigViolation.MISSING_CLUBHOUSE_PROJECT]

    def test_reports_every_violation(self):
        violations = validate_settings(Config(github=GitHubConfig(state='merged')))

        assert violations == [
            ConfigViolation.MISSING_GITHUB_TOKEN,
            ConfigViolation.MISSING_CLUBHOUSE_TOKEN,
            ConfigViolation.MISSING_CLUBHOUSE_PROJECT,
            ConfigViolation.MISSING_GITHUB_REPOSITORY,
            ConfigViolation.INVALID_STATE,
        ]

    @pytest.mark.parametrize('state', ['open', 'closed', 'all', 'OPEN', 'Closed'])
    def test_accepted_states(self, config, state):
        config.github.state = state

        assert validate_settings(config) == []

    def test_missing_state(self, config):
        config.github.state = None

        assert validate_settings(config) == [ConfigViolation.INVALID_STATE]

    def test_violation_messages(self):
        assert (
            ConfigViolation.MISSING_GITHUB_TOKEN.message
            == '--github-token arg is required'
        )
        assert (
            ConfigViolation.INVALID_STATE.message
            == '--state must be one of open | closed | all'
        )


class TestSectionConfigs:
    """Test individual configuration sections."""

    def test_defaults(self):
        config = Config()

        assert config.github.api_url == 'https://api.github.com'
        assert config.github.state == 'open'
        assert config.github.per_page == 100
        assert config.clubhouse.api_url == 'https://api.clubhouse.io/api/v2'
        assert config.importer.batch_size == 10
        assert config.importer.dry_run is False
        assert config.logging.level == 'INFO'

    def test_url_validation(self):
        with pytest.raises(ValueError):
            GitHubConfig(api_url='api.github.com')

        assert (
            ClubhouseConfig(api_url='https://example.com/api/v2/').api_url
            == 'https://example.com/api/v2'
        )

    def test_numeric_project_id(self):
        assert ClubhouseConfig(project_id=1234).project_id == '1234'

    def test_batch_size_bounds(self):
        with pytest.raises(ValueError):
            ImportConfig(batch_size=11)
        with pytest.raises(ValueError):
            ImportConfig(batch_size=0)

    def test_extra_fields_forbidden(self):
        with pytest.raises(ValueError):
            Config(source={'url': 'https://example.com'})


class TestConfigLoading:
    """Test configuration files and environment."""

    def test_from_file(self):
        config_content = """
github:
  token: gh-token
  repository: octo/repo
  state: closed

clubhouse:
  token: ch-token
  project_id: 1234

import:
  dry_run: true
"""

        with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
            f.write(config_content)
            f.flush()

        try:
            config = Config.from_file(f.name)
            assert config.github.token == 'gh-token'
            assert config.github.repository == 'octo/repo'
            assert config.github.state == 'closed'
            assert config.clubhouse.project_id == '1234'
            assert config.importer.dry_run is True
        finally:
            os.unlink(f.name)

    def test_missing_config_file(self):
        with pytest.raises(FileNotFoundError):
            Config.from_file('/nonexistent/config.yaml')

    def test_from_env(self):
        env_vars = {
            'GITHUB_TOKEN': 'gh-token',
            'GITHUB_REPOSITORY': 'octo/repo',
            'GITHUB_ISSUE_STATE': 'all',
            'CLUBHOUSE_TOKEN': 'ch-token',
            'CLUBHOUSE_PROJECT': '1234',
        }

        with patch.dict(os.environ, env_vars), patch(
            'gh_clubhouse.config.config.load_dotenv'
        ):
            config = Config.from_env()

        assert config.github.token == 'gh-token'
        assert config.github.state == 'all'
        assert config.clubhouse.token == 'ch-token'
        assert config.clubhouse.project_id == '1234'
        assert validate_settings(config) == []

    def test_with_overrides(self, config):
        overridden = config.with_overrides(
            clubhouse_project='99', state='closed', dry_run=True
        )

        assert overridden.clubhouse.project_id == '99'
        assert overridden.clubhouse.token == 'ch-token'
        assert overridden.github.state == 'closed'
        assert overridden.github.repository == 'octo/repo'
        assert overridden.importer.dry_run is True
        # Receiver is not modified
        assert config.clubhouse.project_id == '42'

    def test_template_round_trip(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            path = os.path.join(temp_dir, 'gh-clubhouse.yaml')
            Config.create_template(path)

            with open(path, 'r') as f:
                data = yaml.safe_load(f)
            assert set(data) == {'github', 'clubhouse', 'import', 'logging'}

            config = Config.from_file(path)
            assert validate_settings(config) == []

    def test_to_file(self, config):
        with tempfile.TemporaryDirectory() as temp_dir:
            path = os.path.join(temp_dir, 'out.yaml')
            config.to_file(path)

            assert Config.from_file(path).clubhouse.project_id == '42'
