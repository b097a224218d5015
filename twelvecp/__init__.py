"""
AESO 12CP Savings Analytics API.
"""

__version__ = "1.0.0"
