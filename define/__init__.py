"""
Define: A command-line dictionary.

This package looks words up in online dictionary sources, normalizes each
source's response into one canonical model, and renders it as indented
plain text for the terminal.
"""

__version__ = "0.3.0"
