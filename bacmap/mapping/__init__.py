"""In-memory stores for templates and accepted equipment mappings."""
