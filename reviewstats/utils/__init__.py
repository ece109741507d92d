"""
Utility modules for ReviewStats.

Cross-cutting concerns:
- Dates: Parse review timestamps
- Storage: CSV report output
"""
