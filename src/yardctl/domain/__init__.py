"""Domain layer — wagons, stacks, and the sorting yard.

This layer depends only on stdlib and pydantic.
It must never import from services, commands, output, or config.
"""
