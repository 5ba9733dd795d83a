"""The ``agenda`` command-line interface."""
