"""Infrastructure: persistence and external service adapters."""
