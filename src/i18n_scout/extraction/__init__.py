"""Extractor-call string collection."""
