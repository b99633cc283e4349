"""Domain layer: value objects, level table, key rules, and error taxonomy."""
