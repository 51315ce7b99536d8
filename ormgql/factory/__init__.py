"""Factories turning entity classes into field configurations and GraphQL types."""
