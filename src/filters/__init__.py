"""Filters module -- cross-provider merge and URL exclusions."""

from src.filters.exclusions import ExclusionSource, apply_exclusions, load_exclusion_patterns
from src.filters.merge import merge

__all__ = ["ExclusionSource", "apply_exclusions", "load_exclusion_patterns", "merge"]
