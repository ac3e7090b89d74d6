"""Tokenization, normalization and classification of raw point names."""
