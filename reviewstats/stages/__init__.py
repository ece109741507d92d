"""
Pipeline stages for ReviewStats.

Contains the modules a dataset passes through, in order:
- Decompression
- Record repair / parsing
- Aggregation (popularity, rating, period, text search)
"""
