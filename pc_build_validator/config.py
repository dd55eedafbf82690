"""
Configuration management for the PC Build Validator.
"""

import os
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional

import yaml

from .exceptions import ConfigurationError
from .logging_config import get_logger

logger = get_logger('config')

OUTPUT_FORMATS = ('text', 'json', 'markdown', 'excel')


@dataclass
class RuleConfig:
    """Thresholds used by the compatibility rules."""
    psu_headroom_ratio: float = 1.2      # recommended PSU = estimate x ratio
    tight_fit_ratio: float = 0.9         # GPU above this share of case clearance is a tight fit
    high_speed_ram_mhz: int = 3200
    min_filled_slots: int = 4
    stock_cooler_tdp_w: int = 65
    cpu_share_threshold: float = 0.7
    gpu_share_threshold: float = 0.7


@dataclass
class PowerConfig:
    """Constants used by the power estimator."""
    base_overhead_w: int = 50            # motherboard, fans, misc
    gpu_psu_headroom_w: int = 200        # subtracted from a GPU's recommended PSU
    ram_min_w: int = 10
    ram_w_per_gb: int = 2
    ram_high_speed_mhz: int = 3200
    ram_high_speed_bonus_w: int = 5
    nvme_storage_w: int = 8
    drive_storage_w: int = 25


@dataclass
class KnowledgeBaseConfig:
    """Configuration for the hardware lookup tables."""
    files: List[str] = field(default_factory=list)
    include_defaults: bool = True


@dataclass
class OutputConfig:
    """Configuration for output formatting."""
    default_format: str = "text"
    detailed: bool = False
    use_colors: Optional[bool] = None


@dataclass
class LoggingConfig:
    """Configuration for logging."""
    level: str = "INFO"
    log_file: Optional[str] = None
    verbose: bool = False


@dataclass
class Config:
    """Main configuration class."""
    rules: RuleConfig = field(default_factory=RuleConfig)
    power: PowerConfig = field(default_factory=PowerConfig)
    knowledge_base: KnowledgeBaseConfig = field(default_factory=KnowledgeBaseConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(config_path: Optional[str] = None) -> Config:
    """
    Load configuration from file or use defaults.

    Args:
        config_path: Optional path to configuration file

    Returns:
        Config object with loaded settings

    Raises:
        ConfigurationError: If configuration file is invalid
    """
    config = Config()

    if config_path and os.path.exists(config_path):
        try:
            with open(config_path, 'r') as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in configuration file: {e}")
        except OSError as e:
            raise ConfigurationError(f"Error reading configuration file: {e}")

        if config_data:
            if not isinstance(config_data, dict):
                raise ConfigurationError("Configuration file must contain a mapping")
            _update_config_from_dict(config, config_data)
            logger.info(f"Loaded configuration from {config_path}")

    elif config_path:
        logger.warning(f"Configuration file not found: {config_path}")

    validate_config(config)
    return config


def _update_config_from_dict(config: Config, config_data: Dict[str, Any]) -> None:
    """
    Update configuration object from dictionary data.

    Args:
        config: Config object to update
        config_data: Dictionary with configuration data
    """
    sections = {f.name for f in fields(Config)}

    for section_name, section_data in config_data.items():
        if section_name not in sections:
            logger.warning(f"Ignoring unknown configuration section: {section_name}")
            continue
        if not isinstance(section_data, dict):
            raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping")

        section = getattr(config, section_name)
        known_keys = {f.name for f in fields(section)}
        for key, value in section_data.items():
            if key not in known_keys:
                logger.warning(f"Ignoring unknown configuration key: {section_name}.{key}")
                continue
            setattr(section, key, value)


def validate_config(config: Config) -> None:
    """
    Check configuration values.

    Args:
        config: Config to validate

    Raises:
        ConfigurationError: If any value is out of range
    """
    errors = []

    rules = config.rules
    if not _is_number(rules.psu_headroom_ratio) or rules.psu_headroom_ratio < 1:
        errors.append("rules.psu_headroom_ratio must be a number >= 1")
    if not _is_number(rules.tight_fit_ratio) or not 0 < rules.tight_fit_ratio <= 1:
        errors.append("rules.tight_fit_ratio must be between 0 and 1")
    for name in ('cpu_share_threshold', 'gpu_share_threshold'):
        value = getattr(rules, name)
        if not _is_number(value) or not 0 < value <= 1:
            errors.append(f"rules.{name} must be between 0 and 1")
    for name in ('high_speed_ram_mhz', 'stock_cooler_tdp_w'):
        value = getattr(rules, name)
        if not _is_number(value) or value <= 0:
            errors.append(f"rules.{name} must be a positive number")
    if not isinstance(rules.min_filled_slots, int) or not 0 <= rules.min_filled_slots <= 8:
        errors.append("rules.min_filled_slots must be an integer between 0 and 8")

    for f in fields(PowerConfig):
        value = getattr(config.power, f.name)
        if not _is_number(value) or value < 0:
            errors.append(f"power.{f.name} must be a non-negative number")

    if not isinstance(config.knowledge_base.files, list):
        errors.append("knowledge_base.files must be a list of paths")

    if config.output.default_format not in OUTPUT_FORMATS:
        errors.append(
            f"output.default_format must be one of: {', '.join(OUTPUT_FORMATS)}"
        )

    if errors:
        raise ConfigurationError("Invalid configuration:\n" + "\n".join(errors))


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def get_default_config_path() -> Optional[str]:
    """
    Get the default configuration file path.

    Returns:
        Path to default config file if it exists, None otherwise
    """
    possible_paths = [
        'pc_build_validator.yaml',
        'pc_build_validator.yml',
        os.path.expanduser('~/.pc_build_validator.yaml'),
        os.path.expanduser('~/.pc_build_validator.yml'),
    ]

    for path in possible_paths:
        if os.path.exists(path):
            return path

    return None
