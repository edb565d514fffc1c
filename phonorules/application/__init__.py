"""Application layer: ports, configuration and application errors."""
