"""Change preventer rules."""
