"""
BrewBoard - Configuration Module
================================

Centralized configuration for the coffee shop dashboard.
Supports environment-based settings and data path configuration.
"""

import os
import logging
from pathlib import Path
from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class OverviewConfig:
    """Thresholds for the overview business status and feedback rates"""
    # Average profit % needed for each status
    profitable_threshold: float = 18.0
    saturated_threshold: float = 14.0

    # Positive feedback rate model
    feedback_base_rate: float = 72.0
    feedback_growth_weight: float = 10.0
    feedback_margin_weight: float = 2.0
    feedback_min_rate: int = 5
    feedback_max_rate: int = 98


@dataclass
class FeedbackConfig:
    """Days-open thresholds for feedback priority"""
    priority_days: Dict[str, int] = field(default_factory=lambda: {
        'Critical': 14,
        'High': 7,
        'Medium': 3,
    })

    def priority_thresholds(self) -> List[tuple]:
        """Thresholds ordered from most to least urgent"""
        return sorted(self.priority_days.items(), key=lambda kv: kv[1], reverse=True)


@dataclass
class DashboardConfig:
    """Streamlit presentation settings"""
    page_title: str = "BrewBoard – Coffee Shop Admin"
    page_icon: str = "☕"
    layout: str = "wide"
    default_view: str = "Overview"
    views: List[str] = field(default_factory=lambda: [
        'Overview',
        'Stock',
        'Finance',
        'Customer Service',
        'Store',
    ])


@dataclass
class Config:
    """
    Master configuration for BrewBoard

    Usage:
        config = Config(data_path='path/to/data')
        config.overview.profitable_threshold = 20
    """

    # Paths
    data_path: Path = field(default_factory=lambda: Path.cwd() / 'data')
    storage_file: Optional[Path] = None
    log_file: Optional[Path] = None

    # Component configs
    overview: OverviewConfig = field(default_factory=OverviewConfig)
    feedback: FeedbackConfig = field(default_factory=FeedbackConfig)
    dashboard: DashboardConfig = field(default_factory=DashboardConfig)

    # Calendar settings
    years_back: int = 5          # year selectors offer current-5 .. current
    log_level: int = logging.INFO

    def __post_init__(self):
        """Convert string paths to Path objects and derive defaults"""
        if isinstance(self.data_path, str):
            self.data_path = Path(self.data_path)
        if isinstance(self.storage_file, str):
            self.storage_file = Path(self.storage_file)
        if isinstance(self.log_file, str):
            self.log_file = Path(self.log_file)

        if self.storage_file is None:
            self.storage_file = self.data_path / 'local_storage.json'

    @classmethod
    def from_workspace(cls, workspace_path: str) -> 'Config':
        """
        Create config from workspace root path.

        Args:
            workspace_path: Root path of the BrewBoard workspace

        Returns:
            Configured Config instance
        """
        workspace = Path(workspace_path)
        return cls(
            data_path=workspace / 'data',
            log_file=workspace / 'outputs' / 'brewboard.log',
        )

    @classmethod
    def from_env(cls) -> 'Config':
        """
        Create config from environment variables.

        BREWBOARD_HOME selects the workspace root (defaults to the current
        directory); BREWBOARD_LOG_LEVEL sets the logging level name.
        """
        config = cls.from_workspace(os.environ.get('BREWBOARD_HOME', str(Path.cwd())))
        level_name = os.environ.get('BREWBOARD_LOG_LEVEL', '').upper()
        if level_name:
            config.log_level = getattr(logging, level_name, logging.INFO)
        return config


# Default configuration instance
DEFAULT_CONFIG = Config()
