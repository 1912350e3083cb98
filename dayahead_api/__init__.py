"""
Day-ahead electricity price API.

Same-origin proxy and chart-ready views for day-ahead prices per bidding zone.
"""

__version__ = "1.0.0"
