"""Application layer - ports, services, use cases."""
