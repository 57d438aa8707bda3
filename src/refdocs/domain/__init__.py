"""Domain layer: identifiers, front-matter, and cross-reference indices.

This layer depends only on stdlib, pydantic, and ruamel.yaml.
It must never import from services, infrastructure, commands, or config.
"""
