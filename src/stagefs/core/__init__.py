"""Core constants, configuration and errors for stagefs."""
