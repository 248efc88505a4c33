"""Infrastructure layer: persistence, notifications and observability."""
