"""Configuration validation for dir-worker."""

from typing import Any, Dict, List

from ..core.models import Action
from ..exceptions import ConfigError


class ConfigValidator:
    """Validates dir-worker configuration."""
    
    REQUIRED_SECTIONS = ['directories']
    REQUIRED_TASK_FIELDS = ['path', 'action']
    VALID_ACTIONS = [action.value for action in Action]
    VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR']
    
    def validate(self, config: Dict[str, Any]) -> None:
        """Validate configuration data.
        
        Args:
            config: Configuration dictionary to validate.
            
        Raises:
            ConfigError: If configuration is invalid.
        """
        if not isinstance(config, dict):
            raise ConfigError("Configuration must be a mapping at the top level")
        
        self._validate_structure(config)
        self._validate_directories(config['directories'])
        self._validate_backup_root(config)
        
        if 'logging' in config:
            self._validate_logging_config(config['logging'])
    
    def _validate_structure(self, config: Dict[str, Any]) -> None:
        """Validate basic configuration structure.
        
        Raises:
            ConfigError: If required sections are missing.
        """
        missing_sections = [section for section in self.REQUIRED_SECTIONS if section not in config]
        if missing_sections:
            raise ConfigError(f"Missing required configuration sections: {missing_sections}")
    
    def _validate_directories(self, directories: List[Dict[str, Any]]) -> None:
        """Validate the list of directory entries.
        
        Args:
            directories: Directory entries as read from the config file.
            
        Raises:
            ConfigError: If any directory entry is invalid.
        """
        if not isinstance(directories, list):
            raise ConfigError("'directories' must be a list")
        
        for i, entry in enumerate(directories):
            if not isinstance(entry, dict):
                raise ConfigError(f"Directory entry {i} must be a mapping")
            
            missing_fields = [field for field in self.REQUIRED_TASK_FIELDS if field not in entry]
            if missing_fields:
                raise ConfigError(f"Directory entry {i} missing required fields: {missing_fields}")
            
            path = entry['path']
            if not isinstance(path, str) or not path:
                raise ConfigError(f"Directory entry {i} path must be a non-empty string")
            
            action = entry['action']
            if not isinstance(action, str) or action not in self.VALID_ACTIONS:
                raise ConfigError(
                    f"Directory entry {i} has unknown action {action!r} "
                    f"(expected one of: {', '.join(self.VALID_ACTIONS)})"
                )
            
            if 'include_directories' in entry and not isinstance(entry['include_directories'], bool):
                raise ConfigError(f"Directory entry {i} include_directories must be true or false")
    
    def _validate_backup_root(self, config: Dict[str, Any]) -> None:
        """Require a backup root whenever a backup task is configured."""
        backup_root = config.get('backup_root_path')
        if backup_root is not None and (not isinstance(backup_root, str) or not backup_root):
            raise ConfigError("'backup_root_path' must be a non-empty string")
        
        has_backup = any(entry['action'] == Action.BACKUP.value for entry in config['directories'])
        if has_backup and backup_root is None:
            raise ConfigError("'backup_root_path' is required when a directory uses the backup action")
    
    def _validate_logging_config(self, logging_config: Dict[str, Any]) -> None:
        """Validate logging configuration.
        
        Raises:
            ConfigError: If logging configuration is invalid.
        """
        if not isinstance(logging_config, dict):
            raise ConfigError("'logging' must be a mapping")
        
        level = logging_config.get('level', 'WARNING')
        if not isinstance(level, str) or level.upper() not in self.VALID_LOG_LEVELS:
            raise ConfigError(f"Logging configuration has invalid level: {level!r}")
        
        log_file = logging_config.get('file')
        if log_file is not None and not isinstance(log_file, str):
            raise ConfigError("Logging configuration file must be a string")
