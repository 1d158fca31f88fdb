"""Configuration management for the GitHub to Clubhouse importer."""

from enum import Enum
from typing import Optional, Dict, Any, List
from pathlib import Path
import os

from pydantic import BaseModel, ConfigDict, Field, field_validator
import yaml
from dotenv import load_dotenv


ISSUE_STATES = ('open', 'closed', 'all')
MAX_BATCH_SIZE = 10


class GitHubConfig(BaseModel):
    """Configuration for the source GitHub repository."""

    token: Optional[str] = Field(default=None, description='GitHub access token')
    repository: Optional[str] = Field(
        default=None, description='Source repository as owner/repo'
    )
    state: Optional[str] = Field(
        default='open', description='Issue state filter: open, closed or all'
    )
    api_url: str = Field(
        default='https://api.github.com', description='GitHub API base URL'
    )
    per_page: int = Field(default=100, description='Issues requested per page')
    timeout: Optional[int] = Field(
        default=None, description='Request timeout in seconds'
    )

    @field_validator('api_url')
    @classmethod
    def validate_url(cls, v):
        """Validate API URL format."""
        if not v.startswith(('http://', 'https://')):
            raise ValueError('URL must start with http:// or https://')
        return v.rstrip('/')

    @field_validator('per_page')
    @classmethod
    def validate_per_page(cls, v):
        """GitHub caps listing pages at 100 items."""
        if not 1 <= v <= 100:
            raise ValueError('per_page must be between 1 and 100')
        return v


class ClubhouseConfig(BaseModel):
    """Configuration for the destination Clubhouse workspace."""

    token: Optional[str] = Field(default=None, description='Clubhouse API token')
    project_id: Optional[str] = Field(
        default=None, description='Destination Clubhouse project ID'
    )
    api_url: str = Field(
        default='https://api.clubhouse.io/api/v2',
        description='Clubhouse API base URL',
    )
    timeout: Optional[int] = Field(
        default=None, description='Request timeout in seconds'
    )

    @field_validator('project_id', mode='before')
    @classmethod
    def coerce_project_id(cls, v):
        """Accept numeric project IDs from YAML."""
        if v is None:
            return v
        return str(v)

    @field_validator('api_url')
    @classmethod
    def validate_url(cls, v):
        """Validate API URL format."""
        if not v.startswith(('http://', 'https://')):
            raise ValueError('URL must start with http:// or https://')
        return v.rstrip('/')


class ImportConfig(BaseModel):
    """Import-specific configuration."""

    batch_size: int = Field(
        default=MAX_BATCH_SIZE, description='Stories per bulk-create request'
    )
    dry_run: bool = Field(
        default=False, description='Map issues without creating stories'
    )

    @field_validator('batch_size')
    @classmethod
    def validate_batch_size(cls, v):
        """Clubhouse bulk creation accepts at most 10 stories per call."""
        if not 1 <= v <= MAX_BATCH_SIZE:
            raise ValueError(f'Batch size must be between 1 and {MAX_BATCH_SIZE}')
        return v


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default='INFO', description='Log level')
    file: Optional[str] = Field(default=None, description='Log file path')
    format: Optional[str] = Field(default=None, description='Console log format')

    @field_validator('level')
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f'Log level must be one of: {valid_levels}')
        return v.upper()


class ConfigViolation(str, Enum):
    """A configuration rule that must hold before any network call."""

    MISSING_GITHUB_TOKEN = 'github-token'
    MISSING_CLUBHOUSE_TOKEN = 'clubhouse-token'
    MISSING_CLUBHOUSE_PROJECT = 'clubhouse-project'
    MISSING_GITHUB_REPOSITORY = 'github-url'
    INVALID_STATE = 'state'

    @property
    def message(self) -> str:
        if self is ConfigViolation.INVALID_STATE:
            return f'--{self.value} must be one of open | closed | all'
        return f'--{self.value} arg is required'


class Config(BaseModel):
    """Main configuration class for the importer."""

    github: GitHubConfig = Field(
        default_factory=GitHubConfig, description='Source GitHub settings'
    )
    clubhouse: ClubhouseConfig = Field(
        default_factory=ClubhouseConfig, description='Destination Clubhouse settings'
    )
    importer: ImportConfig = Field(
        default_factory=ImportConfig, alias='import', description='Import settings'
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description='Logging settings'
    )

    model_config = ConfigDict(extra='forbid', populate_by_name=True)

    @classmethod
    def from_file(cls, config_path: str) -> 'Config':
        """Load configuration from YAML file."""
        config_file = Path(config_path)

        if not config_file.exists():
            raise FileNotFoundError(f'Configuration file not found: {config_path}')

        with open(config_file, 'r', encoding='utf-8') as f:
            config_data = yaml.safe_load(f) or {}

        return cls(**config_data)

    @classmethod
    def from_env(cls) -> 'Config':
        """Load configuration from environment variables."""
        # Load .env file if it exists
        load_dotenv()

        config_data = {
            'github': {
                'token': os.getenv('GITHUB_TOKEN'),
                'repository': os.getenv('GITHUB_REPOSITORY'),
                'state': os.getenv('GITHUB_ISSUE_STATE'),
                'api_url': os.getenv('GITHUB_API_URL'),
            },
            'clubhouse': {
                'token': os.getenv('CLUBHOUSE_TOKEN'),
                'project_id': os.getenv('CLUBHOUSE_PROJECT'),
                'api_url': os.getenv('CLUBHOUSE_API_URL'),
            },
            'import': {
                'dry_run': os.getenv('IMPORT_DRY_RUN', 'false').lower() == 'true',
            },
            'logging': {
                'level': os.getenv('LOG_LEVEL', 'INFO'),
                'file': os.getenv('LOG_FILE'),
            },
        }

        # Remove None values
        config_data = cls._remove_none_values(config_data)

        return cls(**config_data)

    @staticmethod
    def _remove_none_values(data: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively remove None values from dictionary."""
        if isinstance(data, dict):
            return {
                k: Config._remove_none_values(v)
                for k, v in data.items()
                if v is not None
            }
        return data

    def with_overrides(
        self,
        github_token: Optional[str] = None,
        clubhouse_token: Optional[str] = None,
        clubhouse_project: Optional[str] = None,
        github_repository: Optional[str] = None,
        state: Optional[str] = None,
        dry_run: Optional[bool] = None,
    ) -> 'Config':
        """Return a copy with command-line values layered over this config."""
        github = {'token': github_token, 'repository': github_repository, 'state': state}
        clubhouse = {'token': clubhouse_token, 'project_id': clubhouse_project}

        return self.model_copy(
            update={
                'github': self.github.model_copy(
                    update=self._remove_none_values(github)
                ),
                'clubhouse': self.clubhouse.model_copy(
                    update=self._remove_none_values(clubhouse)
                ),
                'importer': self.importer.model_copy(
                    update=self._remove_none_values({'dry_run': dry_run})
                ),
            }
        )

    def to_file(self, config_path: str) -> None:
        """Save configuration to YAML file."""
        config_file = Path(config_path)
        config_file.parent.mkdir(parents=True, exist_ok=True)

        with open(config_file, 'w', encoding='utf-8') as f:
            yaml.dump(
                self.model_dump(by_alias=True),
                f,
                default_flow_style=False,
                indent=2,
                sort_keys=False,
            )

    @staticmethod
    def create_template(output_path: str) -> None:
        """Create a configuration template file."""
        template_config = {
            'github': {
                'token': 'your-github-personal-access-token',
                'repository': 'owner/repo',
                'state': 'open',
                'api_url': 'https://api.github.com',
            },
            'clubhouse': {
                'token': 'your-clubhouse-api-token',
                'project_id': '1234',
                'api_url': 'https://api.clubhouse.io/api/v2',
            },
            'import': {
                'batch_size': MAX_BATCH_SIZE,
                'dry_run': False,
            },
            'logging': {
                'level': 'INFO',
                'file': 'import.log',
            },
        }

        config_file = Path(output_path)
        config_file.parent.mkdir(parents=True, exist_ok=True)

        with open(config_file, 'w', encoding='utf-8') as f:
            yaml.dump(
                template_config, f, default_flow_style=False, indent=2, sort_keys=False
            )


def validate_settings(config: Config) -> List[ConfigViolation]:
    """Check the settings an import cannot start without.

    Every rule is evaluated, so the caller can report all problems at once.

    Args:
        config: Configuration to check

    Returns:
        Violated rules, empty when the configuration is usable
    """
    violations = []

    if not config.github.token:
        violations.append(ConfigViolation.MISSING_GITHUB_TOKEN)
    if not config.clubhouse.token:
        violations.append(ConfigViolation.MISSING_CLUBHOUSE_TOKEN)
    if not config.clubhouse.project_id:
        violations.append(ConfigViolation.MISSING_CLUBHOUSE_PROJECT)
    if not config.github.repository:
        violations.append(ConfigViolation.MISSING_GITHUB_REPOSITORY)
    if (config.github.state or '').lower() not in ISSUE_STATES:
        violations.append(ConfigViolation.INVALID_STATE)

    return violations
