"""Resolver package for the GraphQL schema.

Each module maps the query, mutation and relationship fields of one entity
onto async SQLAlchemy statements and converts rows into GraphQL types.
"""
