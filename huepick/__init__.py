"""
HuePick Color Engine

Color extraction and colorimetry for interactive color picking: pixel buffer
caching, point/region/grid sampling, palette clustering, color model
conversion and nearest color naming.
"""

__version__ = "1.0.0"
