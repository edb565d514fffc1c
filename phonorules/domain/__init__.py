"""Domain layer: rule entities, catalog engine and errors."""
