"""Streamlit application package for SubTally."""

from .main import main

__all__ = ["main"]
