"""
evalo - keyboard-driven command palette for the Evalo terminal front-end
"""

__version__ = "0.3.0"
