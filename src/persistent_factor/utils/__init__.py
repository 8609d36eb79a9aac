"""Clique complexes, pairing and file helpers built around the factorization."""
