"""
GraphQL layer: strawberry schema, types and resolvers
"""
