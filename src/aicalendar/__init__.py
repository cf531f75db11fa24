"""
AI Calendar: shared calendar events and common free-time search.
"""

__version__ = "0.1.0"
