"""Apollo Federation analysis for GraphQL code generators."""

__version__ = "0.1.0"
