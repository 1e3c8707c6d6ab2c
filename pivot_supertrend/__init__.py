"""
Pivot SuperTrend Signals

Technical-analysis signal engine: Pivot-Point SuperTrend with EMA trend
filters, volume confirmation and swing stop losses.
"""

__version__ = "0.1.0"
