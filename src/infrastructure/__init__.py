"""Infrastructure adapters (database, remote forecast, settings, logging)."""
