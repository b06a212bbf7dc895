"""Core constants, configuration snapshots, errors and small helpers."""
