"""Demo dataset generation."""

from .generator import generate_demo_observations, seed_store

__all__ = ["generate_demo_observations", "seed_store"]
