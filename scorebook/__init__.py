"""
scorebook - paginated client for the league scorebook backend.

Fetches every page of a model kind, decodes rows into frozen records and
delivers results only to requesters that are still live.
"""

__version__ = "0.1.0"
