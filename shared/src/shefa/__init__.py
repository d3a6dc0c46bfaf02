"""Shared settings, error taxonomy, schemas and HTTP clients for Shefa."""
