"""
HuePick Colors Module

Provides color model conversion, nearest color naming, pixel sampling,
palette clustering and harmony generation for sampled colors.
"""

__version__ = "1.0.0"
