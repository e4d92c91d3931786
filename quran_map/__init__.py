"""
QuranMap - Quranic verses shown on a map with their topic and revelation sites.
"""

__version__ = "1.0.0"
