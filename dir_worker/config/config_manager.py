"""Configuration management for dir-worker."""

import json
import os
import yaml
from typing import Any, Dict, List, Optional

from .config_validator import ConfigValidator
from ..core.models import Action, Config, LoggingSettings, Task
from ..exceptions import ConfigError


class ConfigManager:
    """Loads and validates the task configuration file."""
    
    YAML_SUFFIXES = ('.yaml', '.yml')
    
    def __init__(self, config_path: str):
        """Initialize configuration manager.
        
        Args:
            config_path: Path to a JSON or YAML config file.
        """
        self.config_path = config_path
        self.config_data: Dict[str, Any] = {}
        self.validator = ConfigValidator()
        
    def load_config(self) -> Config:
        """Load configuration from file.
        
        Returns:
            Validated Config.
            
        Raises:
            ConfigError: If the file is missing, unreadable, unparseable
                or invalid.
        """
        if not os.path.isfile(self.config_path):
            raise ConfigError(f"Config file not found: {self.config_path}")
        
        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                if self.config_path.lower().endswith(self.YAML_SUFFIXES):
                    self.config_data = yaml.safe_load(f) or {}
                else:
                    self.config_data = json.load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in config file {self.config_path}: {e}") from e
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in config file {self.config_path}: {e}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(f"Error reading config file {self.config_path}: {e}") from e
        
        # Validate configuration
        self.validator.validate(self.config_data)
        
        # Set defaults
        self._set_defaults()
        
        return Config(
            directories=tuple(self.get_tasks()),
            backup_root_path=self.get_backup_root(),
            logging=self.get_logging_config(),
        )
    
    def _set_defaults(self):
        """Set default values for optional configuration parameters."""
        for entry in self.config_data['directories']:
            entry.setdefault('include_directories', False)
        
        logging_config = self.config_data.setdefault('logging', {})
        logging_config.setdefault('level', 'WARNING')
        logging_config.setdefault('file', None)
    
    def get_tasks(self) -> List[Task]:
        """Get the configured tasks in file order."""
        return [
            Task(
                action=Action(entry['action']),
                path=entry['path'],
                include_directories=entry['include_directories'],
            )
            for entry in self.config_data.get('directories', [])
        ]
    
    def get_backup_root(self) -> Optional[str]:
        """Get the backup root path, if configured."""
        return self.config_data.get('backup_root_path')
    
    def get_logging_config(self) -> LoggingSettings:
        """Get logging configuration."""
        logging_config = self.config_data.get('logging', {})
        return LoggingSettings(
            level=logging_config.get('level', 'WARNING').upper(),
            file=logging_config.get('file'),
        )
