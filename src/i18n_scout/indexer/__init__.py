"""Module map: file index and raw import specifiers."""
