"""Domain layer: value types, protocols and events shared by every component."""
