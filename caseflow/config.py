"""
Configuration management - externalized and extensible.

Values come from environment variables (a ``.env`` file in the working
directory is loaded first). A YAML file can override them:

    storage:
      path: ~/.caseflow/store.json
      key: testcases_advanced
    output:
      output_dir: output
    render:
      base_url: https://mermaid.ink
      timeout: 30
    logging:
      level: INFO
      json: false
"""
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass
class StorageConfig:
    """Where the collection slot is persisted."""
    path: str
    key: str

    @classmethod
    def from_env(cls) -> 'StorageConfig':
        """Create config from environment variables."""
        return cls(
            path=os.getenv("CASEFLOW_STORE_PATH", os.path.join("~", ".caseflow", "store.json")),
            key=os.getenv("CASEFLOW_STORE_KEY", "testcases_advanced"),
        )


@dataclass
class OutputConfig:
    """Output configuration."""
    output_dir: str

    @classmethod
    def from_env(cls) -> 'OutputConfig':
        return cls(output_dir=os.getenv("CASEFLOW_OUTPUT_DIR", "output"))


@dataclass
class RenderConfig:
    """Diagram rendering service configuration."""
    base_url: str
    timeout: int = 30

    @classmethod
    def from_env(cls) -> 'RenderConfig':
        return cls(
            base_url=os.getenv("CASEFLOW_MERMAID_URL", "https://mermaid.ink"),
            timeout=int(os.getenv("CASEFLOW_MERMAID_TIMEOUT", "30")),
        )


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "WARNING"
    json: bool = False
    log_file: Optional[str] = None

    @classmethod
    def from_env(cls) -> 'LoggingConfig':
        return cls(
            level=os.getenv("CASEFLOW_LOG_LEVEL", "WARNING"),
            json=_env_bool("CASEFLOW_LOG_JSON"),
            log_file=os.getenv("CASEFLOW_LOG_FILE") or None,
        )


@dataclass
class AppConfig:
    """Application-wide configuration."""
    storage: StorageConfig
    output: OutputConfig
    render: RenderConfig
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_env(cls) -> 'AppConfig':
        return cls(
            storage=StorageConfig.from_env(),
            output=OutputConfig.from_env(),
            render=RenderConfig.from_env(),
            logging=LoggingConfig.from_env(),
        )

    @classmethod
    def load(cls, config_file: Optional[str] = None) -> 'AppConfig':
        """Load application configuration.

        Args:
            config_file: Optional YAML file; defaults to ``$CASEFLOW_CONFIG``

        Returns:
            Environment defaults overridden by the YAML file, if any

        Raises:
            ValueError: If the file is not valid YAML or holds bad values
        """
        config = cls.from_env()
        config_file = config_file or os.getenv("CASEFLOW_CONFIG")
        if config_file:
            with open(os.path.expanduser(config_file), 'r', encoding='utf-8') as f:
                try:
                    data = yaml.safe_load(f) or {}
                except yaml.YAMLError as e:
                    raise ValueError(f"Invalid configuration file {config_file}: {e}") from e
            config.apply(data)
        return config

    def apply(self, data: Dict[str, Any]) -> None:
        """Override fields from a configuration dictionary."""
        if not isinstance(data, dict):
            raise ValueError("Configuration file must contain a mapping")

        storage_data = data.get('storage', {})
        self.storage.path = storage_data.get('path', self.storage.path)
        self.storage.key = storage_data.get('key', self.storage.key)

        output_data = data.get('output', {})
        self.output.output_dir = output_data.get('output_dir', self.output.output_dir)

        render_data = data.get('render', {})
        self.render.base_url = render_data.get('base_url', self.render.base_url)
        self.render.timeout = int(render_data.get('timeout', self.render.timeout))

        logging_data = data.get('logging', {})
        self.logging.level = str(logging_data.get('level', self.logging.level))
        self.logging.json = bool(logging_data.get('json', self.logging.json))
        self.logging.log_file = logging_data.get('log_file', self.logging.log_file)
