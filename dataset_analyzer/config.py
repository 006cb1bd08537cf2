# dataset_analyzer/config.py
import os
from pathlib import Path
from typing import Dict, Any, List, Optional
from dataclasses import dataclass
import json
import logging

logger = logging.getLogger(__name__)

@dataclass
class PathConfig:
    """Configuration for project paths"""
    PROJECT_ROOT: Path
    SAMPLE_DATA_DIR: Path
    REPORTS_DIR: Path
    LOGS_DIR: Path

@dataclass
class IngestionConfig:
    """Configuration for loading CSV sources"""
    MAX_FILE_SIZE_MB: int
    ENCODINGS: List[str]

@dataclass
class ReportConfig:
    """Configuration for report generation"""
    PREVIEW_ROWS: int
    OUTPUT_DIR: Optional[str]

@dataclass
class DeploymentConfig:
    """Configuration for the analysis API"""
    DEFAULT_PORT: int
    DEFAULT_HOST: str
    ENABLE_CORS: bool
    ENABLE_DOCS: bool

class Config:
    """Central configuration manager for the dataset analyzer"""

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration

        Args:
            config_file: Optional path to JSON config file to override defaults
        """
        self._load_default_config()

        if config_file and os.path.exists(config_file):
            self._load_config_file(config_file)

        self._load_environment_variables()

    def _load_default_config(self):
        """Load default configuration values"""

        # Project paths
        project_root = Path(__file__).parent.parent
        self.paths = PathConfig(
            PROJECT_ROOT=project_root,
            SAMPLE_DATA_DIR=Path(__file__).parent / "datasets",
            REPORTS_DIR=project_root / "reports",
            LOGS_DIR=project_root / "logs"
        )

        # Ingestion configuration
        self.ingestion = IngestionConfig(
            MAX_FILE_SIZE_MB=5,
            ENCODINGS=['utf-8-sig', 'latin-1']
        )

        # Report configuration
        self.report = ReportConfig(
            PREVIEW_ROWS=10,
            OUTPUT_DIR=None
        )

        # API configuration
        self.deployment = DeploymentConfig(
            DEFAULT_PORT=8000,
            DEFAULT_HOST="0.0.0.0",
            ENABLE_CORS=True,
            ENABLE_DOCS=True
        )

        # Additional settings
        self.logging_level = "INFO"
        self.debug_mode = False

    def _load_config_file(self, config_file: str):
        """Load configuration from JSON file"""
        try:
            with open(config_file, 'r') as f:
                config_data = json.load(f)

            # Update configurations with values from file
            for section, values in config_data.items():
                if hasattr(self, section):
                    config_obj = getattr(self, section)
                    if not isinstance(values, dict):
                        setattr(self, section, values)
                        continue
                    for key, value in values.items():
                        if hasattr(config_obj, key):
                            current = getattr(config_obj, key)
                            setattr(config_obj, key, Path(value) if isinstance(current, Path) else value)

        except (OSError, ValueError) as e:
            logger.warning(f"Could not load config file {config_file}: {e}")

    def _load_environment_variables(self):
        """Load configuration from environment variables"""

        # Paths
        if os.getenv("REPORTS_DIR"):
            self.paths.REPORTS_DIR = Path(os.getenv("REPORTS_DIR"))

        # Ingestion settings
        if os.getenv("MAX_FILE_SIZE_MB"):
            self.ingestion.MAX_FILE_SIZE_MB = int(os.getenv("MAX_FILE_SIZE_MB"))

        # Report settings
        if os.getenv("PREVIEW_ROWS"):
            self.report.PREVIEW_ROWS = int(os.getenv("PREVIEW_ROWS"))

        # API settings
        if os.getenv("API_PORT"):
            self.deployment.DEFAULT_PORT = int(os.getenv("API_PORT"))

        if os.getenv("API_HOST"):
            self.deployment.DEFAULT_HOST = os.getenv("API_HOST")

        # General settings
        if os.getenv("LOG_LEVEL"):
            self.logging_level = os.getenv("LOG_LEVEL")

        if os.getenv("DEBUG_MODE"):
            self.debug_mode = os.getenv("DEBUG_MODE").lower() == 'true'

    def get_report_dir(self) -> Path:
        """Directory reports are written to"""
        if self.report.OUTPUT_DIR:
            return Path(self.report.OUTPUT_DIR)
        return self.paths.REPORTS_DIR

    def save_config(self, config_file: str):
        """Save current configuration to JSON file"""
        config_dict: Dict[str, Any] = {}

        for attr_name in ('paths', 'ingestion', 'report', 'deployment'):
            section = getattr(self, attr_name)
            config_dict[attr_name] = {
                field_name: str(field_value) if isinstance(field_value, Path) else field_value
                for field_name, field_value in section.__dict__.items()
            }
        config_dict['logging_level'] = self.logging_level
        config_dict['debug_mode'] = self.debug_mode

        with open(config_file, 'w') as f:
            json.dump(config_dict, f, indent=2)

    def validate_config(self) -> List[str]:
        """Validate configuration and return list of issues"""
        issues = []

        if not self.paths.PROJECT_ROOT.exists():
            issues.append(f"Project root does not exist: {self.paths.PROJECT_ROOT}")

        if not self.paths.SAMPLE_DATA_DIR.exists():
            issues.append(f"Sample data directory does not exist: {self.paths.SAMPLE_DATA_DIR}")

        if self.ingestion.MAX_FILE_SIZE_MB <= 0:
            issues.append(f"Invalid max file size: {self.ingestion.MAX_FILE_SIZE_MB}")

        if not self.ingestion.ENCODINGS:
            issues.append("At least one encoding must be configured")

        if self.report.PREVIEW_ROWS < 0:
            issues.append(f"Invalid preview rows: {self.report.PREVIEW_ROWS}")

        if not 0 < self.deployment.DEFAULT_PORT < 65536:
            issues.append(f"Invalid API port: {self.deployment.DEFAULT_PORT}")

        if self.logging_level.upper() not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
            issues.append(f"Invalid log level: {self.logging_level}")

        return issues

    def __str__(self) -> str:
        """String representation of configuration"""
        return f"Config(project_root={self.paths.PROJECT_ROOT}, debug={self.debug_mode})"

# Global configuration instance
_config = None

def get_config(config_file: Optional[str] = None) -> Config:
    """Get global configuration instance (singleton pattern)"""
    global _config
    if _config is None:
        _config = Config(config_file)
    return _config

def reload_config(config_file: Optional[str] = None) -> Config:
    """Reload configuration (useful for testing)"""
    global _config
    _config = Config(config_file)
    return _config

# Example configuration file template
CONFIG_TEMPLATE = {
    "ingestion": {
        "MAX_FILE_SIZE_MB": 5
    },
    "report": {
        "PREVIEW_ROWS": 10,
        "OUTPUT_DIR": "reports"
    },
    "deployment": {
        "DEFAULT_PORT": 8080
    },
    "logging_level": "INFO"
}

def create_config_template(output_file: str):
    """Create a configuration template file"""
    with open(output_file, 'w') as f:
        json.dump(CONFIG_TEMPLATE, f, indent=2)
    logger.info(f"Configuration template created: {output_file}")
