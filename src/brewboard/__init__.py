# BrewBoard Coffee Shop Dashboard

"""
BrewBoard - Coffee Shop Admin Dashboard

This package provides the admin dashboard for a small coffee shop:
overview KPIs, stock coverage, finance and cost tracking, customer
service metrics with feedback triage, and a product catalog editor.

Modules:
- config: Configuration management
- services: Synthetic metrics, calendar bucketing and local persistence
- dashboard: Streamlit views

Usage:
    brewboard            # launches the Streamlit dashboard
"""

__version__ = "1.0.0"
__author__ = "BrewBoard Team"

from .config import Config, DEFAULT_CONFIG

__all__ = [
    'Config',
    'DEFAULT_CONFIG',
]
