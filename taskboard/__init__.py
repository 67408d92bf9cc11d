"""taskboard package."""
