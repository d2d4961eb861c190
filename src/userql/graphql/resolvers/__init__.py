"""Resolver package for the GraphQL schema.

Resolver functions referenced by the query types live in sibling modules.
"""
