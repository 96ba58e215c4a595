"""
PulseTrend - employee review trend pipeline.

Turns irregular, partially missing review records into a regular,
de-noised multi-channel time series plus conditional statistics.
"""

__version__ = "1.0.0"
