"""Shared building blocks for the probe core (models, errors, logging, HTTP)."""
