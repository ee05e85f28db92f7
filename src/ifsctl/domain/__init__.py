"""Domain layer — data model, transform math, generator, grid, frontier.

This layer depends only on stdlib, numpy, and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
