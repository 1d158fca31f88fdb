"""Tests for CLI interface."""

import os
import tempfile
from unittest.mock import AsyncMock, Mock, patch

from click.testing import CliRunner

from gh_clubhouse.cli.main import cli
from gh_clubhouse.config.config import Config
from gh_clubhouse.migration.orchestrator import ImportSummary

FULL_ARGS = [
    'import',
    '--github-token',
    'gh-token',
    '--clubhouse-token',
    'ch-token',
    '--clubhouse-project',
    '42',
    '--github-url',
    'octo/repo',
    '--state',
    'open',
]


def without(args, flag):
    index = args.index(flag)
    return args[:index] + args[index + 2 :]


class TestCLI:
    """Test CLI commands."""

    def setup_method(self):
        self.runner = CliRunner()
        # Never pick up a developer's real configuration
        self.load_patcher = patch(
            'gh_clubhouse.cli.main._load_config', return_value=Config()
        )
        self.mock_load_config = self.load_patcher.start()

    def teardown_method(self):
        self.load_patcher.stop()

    def test_cli_help(self):
        result = self.runner.invoke(cli, ['--help'])

        assert result.exit_code == 0
        assert 'GitHub to Clubhouse' in result.output
        assert 'import' in result.output
        assert 'init' in result.output
        assert 'validate' in result.output

    def test_cli_version(self):
        result = self.runner.invoke(cli, ['--version'])

        assert result.exit_code == 0
        assert '0.1.0' in result.output

    def test_init_command(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = os.path.join(temp_dir, 'test_config.yaml')

            result = self.runner.invoke(cli, ['init', '--output', config_path])

            assert result.exit_code == 0
            assert 'Configuration template created' in result.output
            with open(config_path, 'r') as f:
                content = f.read()
            assert 'github:' in content
            assert 'clubhouse:' in content

    @patch('gh_clubhouse.cli.main.ImportEngine')
    def test_import_missing_project(self, mock_engine_class):
        args = without(FULL_ARGS, '--clubhouse-project')

        result = self.runner.invoke(cli, args)

        assert result.exit_code == 1
        assert result.output.count('Usage:') == 1
        assert '--clubhouse-project arg is required' in result.output
        mock_engine_class.assert_not_called()

    @patch('gh_clubhouse.cli.main.ImportEngine')
    def test_import_reports_every_violation(self, mock_engine_class):
        result = self.runner.invoke(cli, ['import', '--state', 'merged'])

        assert result.exit_code == 1
        assert result.output.count('Usage:') == 5
        assert '--state must be one of open | closed | all' in result.output
        mock_engine_class.assert_not_called()

    @patch('gh_clubhouse.cli.main.ImportEngine')
    def test_import_success(self, mock_engine_class):
        summary = ImportSummary(
            repository='octo/repo',
            project_id='42',
            issues_fetched=25,
            stories_mapped=25,
            stories_imported=15,
            batches_total=3,
            batches_failed=1,
        )
        mock_engine = Mock()
        mock_engine.run = AsyncMock(return_value=summary)
        mock_engine_class.return_value = mock_engine

        result = self.runner.invoke(cli, FULL_ARGS)

        assert result.exit_code == 0
        assert 'Import Summary' in result.output
        assert '1/3' in result.output

        config = mock_engine_class.call_args.args[0]
        assert config.clubhouse.project_id == '42'
        assert config.github.repository == 'octo/repo'
        assert config.importer.dry_run is False

    @patch('gh_clubhouse.cli.main.ImportEngine')
    def test_import_dry_run(self, mock_engine_class):
        mock_engine = Mock()
        mock_engine.run = AsyncMock(
            return_value=ImportSummary(
                repository='octo/repo', project_id='42', dry_run=True
            )
        )
        mock_engine_class.return_value = mock_engine

        result = self.runner.invoke(cli, FULL_ARGS + ['--dry-run'])

        assert result.exit_code == 0
        assert 'dry-run mode' in result.output
        assert mock_engine_class.call_args.args[0].importer.dry_run is True

    @patch('gh_clubhouse.cli.main.ImportEngine')
    def test_import_unexpected_failure(self, mock_engine_class):
        mock_engine = Mock()
        mock_engine.run = AsyncMock(side_effect=RuntimeError('boom'))
        mock_engine_class.return_value = mock_engine

        result = self.runner.invoke(cli, FULL_ARGS)

        assert result.exit_code == 1
        assert 'Import failed' in result.output

    def test_validate_invalid_config(self):
        result = self.runner.invoke(cli, ['validate'])

        assert result.exit_code == 1
        assert '--github-token arg is required' in result.output

    @patch('gh_clubhouse.cli.main.ImportEngine')
    def test_validate_success(self, mock_engine_class, config):
        self.mock_load_config.return_value = config
        mock_engine_class.return_value = Mock()

        result = self.runner.invoke(cli, ['validate'])

        assert result.exit_code == 0
        assert 'Configuration validation completed' in result.output
        assert 'Connectivity validation passed' in result.output
        mock_engine_class.return_value.test_connectivity.assert_called_once()

    @patch('gh_clubhouse.cli.main.ImportEngine')
    def test_validate_connectivity_failure(self, mock_engine_class, config):
        self.mock_load_config.return_value = config
        mock_engine = Mock()
        mock_engine.test_connectivity.side_effect = ConnectionError(
            'Cannot connect to Clubhouse'
        )
        mock_engine_class.return_value = mock_engine

        result = self.runner.invoke(cli, ['validate'])

        assert result.exit_code == 1
        assert 'Cannot connect to Clubhouse' in result.output
        mock_engine.close.assert_called_once()
