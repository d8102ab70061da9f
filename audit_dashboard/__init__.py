"""Snyk audit log dashboard backend."""
