"""Platform-aware module resolution."""
