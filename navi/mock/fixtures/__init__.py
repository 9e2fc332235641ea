"""Canned replies for the mock provider."""
