"""Application services coordinating the core and boundary layers."""
