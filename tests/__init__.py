"""AGENDA test suite.

Folder taxonomy
- unit/         : Isolated, fast checks of a single module/class/function.
- integration/  : Real interactions with external systems (SQLite files, Alembic).
- contract/     : Shared behavior enforced across every repository implementation.
- e2e/          : The ``agenda`` CLI driven through Click's CliRunner.
- functional/   : User stories told through the CLI, one flow per test.
- fixtures/     : Shared fixtures registered via ``pytest_plugins`` (no tests here).

General guidance
- Keep unit fast and deterministic (no real I/O); prefer in-memory adapters
  and a fixed clock over mocks.
- Property-based tests live with the layer they exercise and use
  @pytest.mark.property.
"""
