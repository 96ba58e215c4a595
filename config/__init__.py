"""
Configuration package for PulseTrend.
"""
