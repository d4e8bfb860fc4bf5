# BrewBoard Tests Package

"""
Test suite for the BrewBoard coffee shop dashboard.

This package contains:
- Calendar bucketing and seeded metric tests
- Service tests for stock, finance, customer service and catalog
- Storage, login, validation, logging and chart builder tests
"""
