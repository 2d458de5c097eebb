"""Modules du pipeline de capture."""
