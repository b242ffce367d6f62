"""Subspecifications for the proof-of-work consensus rules."""
