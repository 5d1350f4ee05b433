"""Narration services."""

from small_tales.services.narration_engine import NarrationEngine, estimate_cost
from small_tales.services.narration_player import NarrationPlayer

__all__ = ["NarrationEngine", "NarrationPlayer", "estimate_cost"]
