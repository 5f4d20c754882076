"""
GraphQL package: Strawberry schema, types, resolvers and batch loaders
"""
