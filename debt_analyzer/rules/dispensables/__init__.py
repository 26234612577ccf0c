"""Dispensable rules: comments and duplicated code."""
