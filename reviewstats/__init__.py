"""
ReviewStats - aggregate reports over gzip-compressed JSON-lines product reviews.
"""

__version__ = "1.0.0"
