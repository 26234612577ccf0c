"""Bloater rules: methods and classes grown too large."""
