"""
Knowledge backend.

Document ingestion and semantic retrieval for project knowledge bases.
"""

__version__ = "0.1.0"
