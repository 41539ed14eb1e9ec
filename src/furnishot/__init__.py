"""Furnishot: prompt composition for furniture product photography generation."""

__version__ = "0.1.0"
