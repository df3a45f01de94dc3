"""Kotoba learning progress service."""
