"""Read-only adapters for the course and vocabulary catalog."""
