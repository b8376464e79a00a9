"""Application layer: simulation engine and its collaborators."""
