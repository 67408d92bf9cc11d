"""Departments, task columns and the rules deciding who sees what."""
