"""Tree-sitter parsing of JS/TS sources."""
