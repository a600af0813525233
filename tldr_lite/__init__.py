"""
Command-line viewer for tldr-pages cheat sheets.
"""

__version__ = "0.1.0"
