"""Coupler rules."""
