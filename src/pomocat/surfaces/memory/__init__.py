"""In-memory surface for development and testing."""

from pomocat.surfaces.memory.memory_surface import InMemorySurface

__all__ = ["InMemorySurface"]
