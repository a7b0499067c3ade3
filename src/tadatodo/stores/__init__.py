"""Manifest storage, fingerprints and post-edit sync."""
