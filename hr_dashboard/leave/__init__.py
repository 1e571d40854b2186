"""Leave module — overlay resolution and leave read/apply endpoints."""
