"""Chess engine building blocks: bitboards, attack tables, benchmark command lists and debug statistics."""

__version__ = "0.1.0"
__all__ = ["benchmark", "benchmark_positions", "bitboard", "debugstats", "misc"]