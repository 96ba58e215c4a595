"""
Data models for PulseTrend.

- ReviewRecord: one respondent entry
- DateOfInterest / SubPeriod: annotation dates and scoping windows
- StatisticDefinition / StatisticResult: conditional statistics
"""
