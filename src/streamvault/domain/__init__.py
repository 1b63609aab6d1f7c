"""Domain layer: listening-history entities, ports, and import services."""
