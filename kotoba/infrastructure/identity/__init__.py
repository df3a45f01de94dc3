"""Identity boundary: who is calling."""
