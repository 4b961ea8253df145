"""Bounded contexts of the intention resolution engine."""
