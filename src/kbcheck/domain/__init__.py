"""Domain layer — checklist inputs, probe descriptors, and message text.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
