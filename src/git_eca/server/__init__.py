"""HTTP server for the Git ECA validation service."""
