"""Role-gated internal announcement board."""
