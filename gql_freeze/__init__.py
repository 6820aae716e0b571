"""gql-freeze: generate frozen TypeScript client modules from GraphQL schemas."""

__version__ = "0.1.0"
