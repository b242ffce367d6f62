"""Proof-of-work difficulty retargeting and validation rules."""
