"""Logging, configuration and validation."""
