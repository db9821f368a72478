"""Utility helpers for stagefs."""
