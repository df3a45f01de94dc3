"""Access token handling."""
