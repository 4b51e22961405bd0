"""Domain layer — kinds, predicates, and the signed-decimal composite.

This layer depends only on stdlib and pydantic.
It must never import from engine, plugins, or config.
"""
