"""Login, registration and user administration."""
