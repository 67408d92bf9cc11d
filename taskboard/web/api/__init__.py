"""taskboard API package."""
