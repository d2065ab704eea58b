"""Pattern engine — models, registry, built-in patterns, recommendations."""

from inputguard.rules.models import Pattern
from inputguard.rules.registry import PatternRegistry, load_pattern_files

__all__ = ["Pattern", "PatternRegistry", "load_pattern_files"]
