"""Configuration management utilities"""

import yaml
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import dataclass

from ..exceptions import ConfigError
from ..pipeline.analysis_pipeline import PipelineConfig


@dataclass
class Config:
    """Application configuration"""

    analysis: Dict[str, Any] = None
    logging: Dict[str, Any] = None

    def __post_init__(self):
        """Set defaults"""
        for section in ('analysis', 'logging'):
            value = getattr(self, section)
            if value is not None and not isinstance(value, dict):
                raise ConfigError(f"Configuration section '{section}' must be a mapping, "
                                  f"got {type(value).__name__}")

        defaults = PipelineConfig()
        analysis_defaults = {
            'sample_step_seconds': defaults.sample_step_seconds,
            'horizontal_threshold_nm': defaults.horizontal_threshold_nm,
            'vertical_threshold_ft': defaults.vertical_threshold_ft,
            'use_spatial_grid': defaults.use_spatial_grid,
            'route_error_policy': defaults.route_error_policy,
            'include_map_data': defaults.include_map_data
        }
        self.analysis = {**analysis_defaults, **(self.analysis or {})}

        if self.logging is None:
            self.logging = {
                'level': 'INFO'
            }

    @classmethod
    def load(cls, config_path: Optional[Path] = None, must_exist: bool = False):
        """Load configuration from file

        A missing file gives the defaults unless ``must_exist`` is set.
        """
        if must_exist and not (config_path and config_path.exists()):
            raise ConfigError(f"Configuration file not found: {config_path}")
        if config_path and config_path.exists():
            try:
                with open(config_path, 'r') as f:
                    config_data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in {config_path}: {e}")
            if not isinstance(config_data, dict):
                raise ConfigError(f"Configuration root in {config_path} must be a mapping")
            try:
                return cls(**config_data)
            except TypeError as e:
                raise ConfigError(f"Unknown configuration section in {config_path}: {e}")
        return cls()

    def to_pipeline_config(self) -> PipelineConfig:
        try:
            return PipelineConfig(**self.analysis)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid analysis configuration: {e}")
