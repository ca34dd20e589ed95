"""Settings, paths and credential persistence."""
