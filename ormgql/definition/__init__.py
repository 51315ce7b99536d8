"""GraphQL type definitions generated for entities."""
