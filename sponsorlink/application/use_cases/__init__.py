"""Use cases orchestrating domain entities and infrastructure."""
