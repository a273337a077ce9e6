"""Core utilities: configuration, result types, query-string normalization."""
