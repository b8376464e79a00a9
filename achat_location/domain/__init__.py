"""Domain layer: models and pure calculators."""
