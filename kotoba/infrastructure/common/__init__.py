"""Cross-cutting infrastructure: dependency wiring, error handling, response schemas."""
