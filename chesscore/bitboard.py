"""Bitboards: 64-bit square sets, attack tables and magic lookups for sliding pieces."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from functools import lru_cache

from chesscore.misc import Prng

__all__ = [
    "Color",
    "PieceType",
    "Direction",
    "Magic",
    "make_square",
    "file_of",
    "rank_of",
    "square_bb",
    "more_than_one",
    "rank_bb",
    "file_bb",
    "shift",
    "pawn_attacks_bb",
    "line_bb",
    "between_bb",
    "aligned",
    "distance",
    "file_distance",
    "rank_distance",
    "edge_distance",
    "sliding_attack",
    "attacks_bb",
    "pseudo_attacks",
    "popcount",
    "lsb",
    "msb",
    "least_significant_square_bb",
    "pop_lsb",
    "pretty",
]

MASK64 = (1 << 64) - 1
SQUARE_NB = 64

FILE_A, FILE_B, FILE_C, FILE_D, FILE_E, FILE_F, FILE_G, FILE_H = range(8)
RANK_1, RANK_2, RANK_3, RANK_4, RANK_5, RANK_6, RANK_7, RANK_8 = range(8)

FILE_A_BB = 0x0101010101010101
FILE_BBS = tuple(FILE_A_BB << f for f in range(8))
FILE_H_BB = FILE_BBS[FILE_H]

RANK_1_BB = 0xFF
RANK_BBS = tuple(RANK_1_BB << (8 * r) for r in range(8))
RANK_8_BB = RANK_BBS[RANK_8]


class Color(IntEnum):
    WHITE = 0
    BLACK = 1


class PieceType(IntEnum):
    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


class Direction(IntEnum):
    NORTH = 8
    EAST = 1
    SOUTH = -8
    WEST = -1
    NORTH_EAST = 9
    SOUTH_EAST = -7
    SOUTH_WEST = -9
    NORTH_WEST = 7


_ROOK_DIRECTIONS = (Direction.NORTH, Direction.SOUTH, Direction.EAST, Direction.WEST)
_BISHOP_DIRECTIONS = (
    Direction.NORTH_EAST,
    Direction.SOUTH_EAST,
    Direction.SOUTH_WEST,
    Direction.NORTH_WEST,
)

# PRNG seeds that find the rook/bishop magics quickly, one per rank.
_MAGIC_SEEDS = (728, 10316, 55013, 32803, 12281, 15100, 16645, 255)


def _check_square(square: int) -> int:
    if not 0 <= square < SQUARE_NB:
        raise ValueError(f"square out of range: {square}")
    return square


def make_square(file: int, rank: int) -> int:
    """Return the square index of the given file and rank (both 0..7)."""
    if not (0 <= file < 8 and 0 <= rank < 8):
        raise ValueError(f"invalid file/rank: {file}, {rank}")
    return (rank << 3) + file


def file_of(square: int) -> int:
    """Return the file (0..7) of a square."""
    return _check_square(square) & 7


def rank_of(square: int) -> int:
    """Return the rank (0..7) of a square."""
    return _check_square(square) >> 3


def square_bb(square: int) -> int:
    """Return the bitboard with only ``square`` set."""
    return 1 << _check_square(square)


def more_than_one(b: int) -> bool:
    """Return True if more than one bit of ``b`` is set."""
    return bool(b & (b - 1))


def rank_bb(rank: int) -> int:
    """Return the bitboard of all squares on a rank."""
    return RANK_BBS[rank]


def file_bb(file: int) -> int:
    """Return the bitboard of all squares on a file."""
    return FILE_BBS[file]


def shift(b: int, direction: int) -> int:
    """Move every square of ``b`` one step (or two straight steps) in ``direction``."""
    if direction == Direction.NORTH:
        return (b << 8) & MASK64
    if direction == Direction.SOUTH:
        return b >> 8
    if direction == 2 * Direction.NORTH:
        return (b << 16) & MASK64
    if direction == 2 * Direction.SOUTH:
        return b >> 16
    if direction == Direction.EAST:
        return ((b & ~FILE_H_BB) << 1) & MASK64
    if direction == Direction.WEST:
        return (b & ~FILE_A_BB) >> 1
    if direction == Direction.NORTH_EAST:
        return ((b & ~FILE_H_BB) << 9) & MASK64
    if direction == Direction.NORTH_WEST:
        return ((b & ~FILE_A_BB) << 7) & MASK64
    if direction == Direction.SOUTH_EAST:
        return (b & ~FILE_H_BB) >> 7
    if direction == Direction.SOUTH_WEST:
        return (b & ~FILE_A_BB) >> 9
    return 0


def pawn_attacks_bb(color: int, b: int) -> int:
    """Return the squares attacked by pawns of ``color`` standing on ``b``."""
    if color == Color.WHITE:
        return shift(b, Direction.NORTH_WEST) | shift(b, Direction.NORTH_EAST)
    return shift(b, Direction.SOUTH_WEST) | shift(b, Direction.SOUTH_EAST)


def file_distance(s1: int, s2: int) -> int:
    """Return the number of files between two squares."""
    return abs(file_of(s1) - file_of(s2))


def rank_distance(s1: int, s2: int) -> int:
    """Return the number of ranks between two squares."""
    return abs(rank_of(s1) - rank_of(s2))


def distance(s1: int, s2: int) -> int:
    """Return the number of king steps from one square to the other."""
    return max(file_distance(s1, s2), rank_distance(s1, s2))


def edge_distance(file: int) -> int:
    """Return how far a file lies from the nearer board edge."""
    return min(file, FILE_H - file)


def popcount(b: int) -> int:
    """Return the number of set bits."""
    return bin(b & MASK64).count("1")


def lsb(b: int) -> int:
    """Return the least significant set square of a non-empty bitboard."""
    if not b:
        raise ValueError("empty bitboard has no least significant bit")
    return (b & -b).bit_length() - 1


def msb(b: int) -> int:
    """Return the most significant set square of a non-empty bitboard."""
    if not b:
        raise ValueError("empty bitboard has no most significant bit")
    return (b & MASK64).bit_length() - 1


def least_significant_square_bb(b: int) -> int:
    """Return the bitboard of the least significant set square."""
    if not b:
        raise ValueError("empty bitboard has no least significant bit")
    return b & -b


def pop_lsb(b: int) -> tuple[int, int]:
    """Return the least significant square and the bitboard without it."""
    square = lsb(b)
    return square, b & (b - 1)


def _safe_destination(square: int, step: int) -> int:
    to = square + step
    if 0 <= to < SQUARE_NB and distance(square, to) <= 2:
        return 1 << to
    return 0


def sliding_attack(piece_type: int, square: int, occupied: int) -> int:
    """Compute rook or bishop attacks from ``square`` by walking each ray."""
    directions = _ROOK_DIRECTIONS if piece_type == PieceType.ROOK else _BISHOP_DIRECTIONS
    attacks = 0
    for d in directions:
        s = square
        while _safe_destination(s, d):
            s += d
            attacks |= 1 << s
            if occupied & (1 << s):
                break
    return attacks


@dataclass
class Magic:
    """Magic bitboard data for one square and one sliding piece type."""

    mask: int
    magic: int
    shift: int
    attacks: list[int] = field(default_factory=list, repr=False)

    def index(self, occupied: int) -> int:
        """Return the table index for the given occupancy."""
        return (((occupied & self.mask) * self.magic) & MASK64) >> self.shift

    def attacks_bb(self, occupied: int) -> int:
        """Return the attacks for the given occupancy."""
        return self.attacks[self.index(occupied)]


def _init_magics(piece_type: int) -> list[Magic]:
    magics: list[Magic] = []
    epoch = [0] * 4096
    cnt = 0

    for s in range(SQUARE_NB):
        # Board edges are not part of the relevant occupancy.
        edges = ((RANK_1_BB | RANK_8_BB) & ~rank_bb(rank_of(s))) | (
            (FILE_A_BB | FILE_H_BB) & ~file_bb(file_of(s))
        )
        mask = sliding_attack(piece_type, s, 0) & ~edges & MASK64
        shift_bits = 64 - popcount(mask)

        # Carry-rippler enumeration of every subset of the mask.
        occupancy: list[int] = []
        reference: list[int] = []
        b = 0
        while True:
            occupancy.append(b)
            reference.append(sliding_attack(piece_type, s, b))
            b = (b - mask) & mask
            if not b:
                break

        attacks = [0] * len(occupancy)
        rng = Prng(_MAGIC_SEEDS[rank_of(s)])

        while True:
            magic = 0
            while popcount(((magic * mask) & MASK64) >> 56) < 6:
                magic = rng.sparse_rand()

            cnt += 1
            for occ, ref in zip(occupancy, reference):
                idx = ((occ * magic) & MASK64) >> shift_bits
                if epoch[idx] < cnt:
                    epoch[idx] = cnt
                    attacks[idx] = ref
                elif attacks[idx] != ref:
                    break
            else:
                break

        magics.append(Magic(mask=mask, magic=magic, shift=shift_bits, attacks=attacks))
    return magics


@dataclass
class _Tables:
    rook_magics: list[Magic]
    bishop_magics: list[Magic]
    pseudo: list[list[int]]
    line: list[list[int]]
    between: list[list[int]]


def _slider(tables: _Tables, piece_type: int, square: int, occupied: int) -> int:
    if piece_type == PieceType.BISHOP:
        return tables.bishop_magics[square].attacks_bb(occupied)
    if piece_type == PieceType.ROOK:
        return tables.rook_magics[square].attacks_bb(occupied)
    return tables.bishop_magics[square].attacks_bb(occupied) | tables.rook_magics[
        square
    ].attacks_bb(occupied)


@lru_cache(maxsize=None)
def _tables() -> _Tables:
    tables = _Tables(
        rook_magics=_init_magics(PieceType.ROOK),
        bishop_magics=_init_magics(PieceType.BISHOP),
        pseudo=[[0] * SQUARE_NB for _ in range(len(PieceType) + 1)],
        line=[[0] * SQUARE_NB for _ in range(SQUARE_NB)],
        between=[[0] * SQUARE_NB for _ in range(SQUARE_NB)],
    )
    pseudo = tables.pseudo

    for s1 in range(SQUARE_NB):
        for step in (-9, -8, -7, -1, 1, 7, 8, 9):
            pseudo[PieceType.KING][s1] |= _safe_destination(s1, step)
        for step in (-17, -15, -10, -6, 6, 10, 15, 17):
            pseudo[PieceType.KNIGHT][s1] |= _safe_destination(s1, step)

        bishop = _slider(tables, PieceType.BISHOP, s1, 0)
        rook = _slider(tables, PieceType.ROOK, s1, 0)
        pseudo[PieceType.BISHOP][s1] = bishop
        pseudo[PieceType.ROOK][s1] = rook
        pseudo[PieceType.QUEEN][s1] = bishop | rook

        for pt in (PieceType.BISHOP, PieceType.ROOK):
            for s2 in range(SQUARE_NB):
                if pseudo[pt][s1] & (1 << s2):
                    tables.line[s1][s2] = (
                        _slider(tables, pt, s1, 0) & _slider(tables, pt, s2, 0)
                    ) | (1 << s1) | (1 << s2)
                    tables.between[s1][s2] = _slider(tables, pt, s1, 1 << s2) & _slider(
                        tables, pt, s2, 1 << s1
                    )
                tables.between[s1][s2] |= 1 << s2

    return tables


def line_bb(s1: int, s2: int) -> int:
    """Return the full edge-to-edge line through two squares, or 0 if not aligned."""
    return _tables().line[_check_square(s1)][_check_square(s2)]


def between_bb(s1: int, s2: int) -> int:
    """Return the squares after ``s1`` up to and including ``s2``.

    When the squares are not on a common line only ``s2`` is returned.
    """
    return _tables().between[_check_square(s1)][_check_square(s2)]


def aligned(s1: int, s2: int, s3: int) -> bool:
    """Return True if the three squares lie on one straight or diagonal line."""
    return bool(line_bb(s1, s2) & square_bb(s3))


def pseudo_attacks(piece_type: int, square: int) -> int:
    """Return the attacks of a non-pawn piece on an empty board."""
    if piece_type == PieceType.PAWN or piece_type not in PieceType.__members__.values():
        raise ValueError(f"no pseudo attacks for piece type {piece_type}")
    return _tables().pseudo[piece_type][_check_square(square)]


def attacks_bb(piece_type: int, square: int, occupied: int) -> int:
    """Return the attacks of a non-pawn piece given the board occupancy."""
    if piece_type == PieceType.PAWN or piece_type not in PieceType.__members__.values():
        raise ValueError(f"no attacks for piece type {piece_type}")
    _check_square(square)
    tables = _tables()
    if piece_type in (PieceType.BISHOP, PieceType.ROOK, PieceType.QUEEN):
        return _slider(tables, piece_type, square, occupied)
    return tables.pseudo[piece_type][square]


def pretty(b: int) -> str:
    """Return an ASCII drawing of a bitboard."""
    border = "+---+---+---+---+---+---+---+---+\n"
    lines = [border]
    for r in range(RANK_8, RANK_1 - 1, -1):
        row = "".join(
            "| X " if b & square_bb(make_square(f, r)) else "|   " for f in range(8)
        )
        lines.append(f"{row}| {1 + r}\n{border}")
    lines.append("  a   b   c   d   e   f   g   h\n")
    return "".join(lines)