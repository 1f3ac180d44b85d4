"""
Logging configuration package for feeder coordination studies.

This package provides logging setup and path utilities for script output.

Modules:
    configure_logging: Path resolution and logging decorators
"""
