"""Animated Pokeball scene served to remote terminals."""

__version__ = "0.1.0"
