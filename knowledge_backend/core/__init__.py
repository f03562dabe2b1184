"""
Core business logic for document ingestion and retrieval.

Contains the ingestion pipeline (extraction, chunking, embedding,
persistence), similarity ranking, and the exception hierarchy.
"""
