"""
Boundary layer: adapters for PostgreSQL and S3.
"""
