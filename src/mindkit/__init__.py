"""
mindkit - sync AI coding-assistant configuration across tools.
"""

__version__ = "0.1.0"
