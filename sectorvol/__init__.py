"""
Sector volatility analytics and forecasting pipeline.
"""
__version__ = "0.1.0"
