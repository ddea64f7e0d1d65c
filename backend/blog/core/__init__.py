"""Cross-cutting application infrastructure: config, logging, errors and HTTP hooks."""
