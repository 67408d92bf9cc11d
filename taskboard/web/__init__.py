"""WEB API for taskboard."""
