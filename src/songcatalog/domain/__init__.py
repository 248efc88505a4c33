"""Domain layer: entities, typed errors, value objects and ports."""
