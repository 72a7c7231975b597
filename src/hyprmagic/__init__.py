"""Hypr Magic: a floating scratchpad that polishes text with Gemini."""

__version__ = "0.1.0"
