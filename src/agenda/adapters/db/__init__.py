"""SQLAlchemy persistence for AGENDA: engine factory, schema and repositories."""
