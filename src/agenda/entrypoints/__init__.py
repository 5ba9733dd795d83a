"""Entry points (presentation layer) for AGENDA."""
