"""Settings, database access, caller identity, errors and logging."""
