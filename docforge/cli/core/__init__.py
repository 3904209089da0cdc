"""Shared CLI infrastructure."""
