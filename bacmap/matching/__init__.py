"""Similarity scoring, mapping templates and equipment auto-mapping."""
