"""Shared test configuration."""

import os

# Must be set before the application settings are first loaded
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DEBUG", "true")
