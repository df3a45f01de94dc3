"""Repository and catalog protocols for the learning context."""
