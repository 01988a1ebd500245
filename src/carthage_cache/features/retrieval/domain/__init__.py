"""Domain types, errors and path layout for cached artifacts."""
