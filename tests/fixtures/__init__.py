"""Shared fixtures, registered through ``pytest_plugins`` in the root conftest."""
