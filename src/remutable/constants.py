"""
Shared constants for remutable.

This module provides a single source of truth for default values
that are used across multiple modules.
"""

# Path defaults
DEFAULT_PATH_DELIMITER = "."
"""Separator used when a path is given as a string (``"a.b.c"``)."""

# Configuration
ENV_PREFIX = "REMUTABLE_"
"""Prefix for environment variables read by Settings."""

ENV_CONFIG_FILE = "REMUTABLE_CONFIG_FILE"
"""Environment variable naming an explicit YAML config file."""

DEFAULT_CONFIG_FILENAME = "remutable.yaml"
"""Config file looked up in the current directory when none is named."""
