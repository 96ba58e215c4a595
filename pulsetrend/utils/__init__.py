"""
Utility modules for PulseTrend.

Cross-cutting concerns:
- Storage: File I/O helpers for raw tables and pipeline outputs
- Logging: Application-wide logging configuration
"""
