"""Collect translatable strings reachable from the entry points of a multi-platform JS/TS app."""
