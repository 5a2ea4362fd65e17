"""Chess engine building blocks: bitboards, magic attacks, debug statistics and helpers."""

__version__ = "0.1.0"

__all__ = ["bitboard", "misc", "utils"]