"""Support utilities for the tile collapse engine."""
