"""
weekagenda - lay out a week of appointments so overlapping ones sit side by side.
"""

__version__ = "0.1.0"
