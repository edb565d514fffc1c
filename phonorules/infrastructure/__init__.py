"""Infrastructure layer: catalog sources, repositories and composition root."""
