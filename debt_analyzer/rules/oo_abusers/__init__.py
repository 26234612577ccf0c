"""Object-orientation abuser rules."""
