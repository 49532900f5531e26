"""Application layer: DTOs, ports, services and use cases."""
