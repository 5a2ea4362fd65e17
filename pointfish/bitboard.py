"""Bitboards: 64-bit square sets, precomputed attack tables and magic lookups.

Squares are integers from 0 (a1) to 63 (h8), numbered file first, so that
``square = 8 * rank + file``. Bitboards are non-negative Python integers
below ``2**64`` with bit ``s`` standing for square ``s``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator, List, Optional, Tuple

from .utils import PRNG

__all__ = [
    "Color",
    "PieceType",
    "Direction",
    "Magic",
    "MAGICS",
    "SQUARE_NB",
    "FILE_A_BB",
    "FILE_B_BB",
    "FILE_C_BB",
    "FILE_D_BB",
    "FILE_E_BB",
    "FILE_F_BB",
    "FILE_G_BB",
    "FILE_H_BB",
    "RANK_1_BB",
    "RANK_2_BB",
    "RANK_3_BB",
    "RANK_4_BB",
    "RANK_5_BB",
    "RANK_6_BB",
    "RANK_7_BB",
    "RANK_8_BB",
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
    "pseudo_attacks",
    "attacks_bb",
    "sliding_attack",
    "popcount",
    "lsb",
    "msb",
    "least_significant_square_bb",
    "pop_lsb",
    "iter_squares",
    "pretty",
]

MASK64 = (1 << 64) - 1
SQUARE_NB = 64


class Color(IntEnum):
    WHITE = 0
    BLACK = 1


class PieceType(IntEnum):
    NO_PIECE_TYPE = 0
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


FILE_A_BB = 0x0101010101010101
FILE_B_BB = FILE_A_BB << 1
FILE_C_BB = FILE_A_BB << 2
FILE_D_BB = FILE_A_BB << 3
FILE_E_BB = FILE_A_BB << 4
FILE_F_BB = FILE_A_BB << 5
FILE_G_BB = FILE_A_BB << 6
FILE_H_BB = FILE_A_BB << 7

RANK_1_BB = 0xFF
RANK_2_BB = RANK_1_BB << (8 * 1)
RANK_3_BB = RANK_1_BB << (8 * 2)
RANK_4_BB = RANK_1_BB << (8 * 3)
RANK_5_BB = RANK_1_BB << (8 * 4)
RANK_6_BB = RANK_1_BB << (8 * 5)
RANK_7_BB = RANK_1_BB << (8 * 6)
RANK_8_BB = RANK_1_BB << (8 * 7)


# ---------------------------------------------------------------------------
# Squares, files and ranks
# ---------------------------------------------------------------------------


def _check_square(s: int) -> int:
    if not 0 <= s < SQUARE_NB:
        raise ValueError(f"square {s} out of range")
    return s


def make_square(file: int, rank: int) -> int:
    """Return the square on the given file and rank (both 0 to 7)."""
    return (rank << 3) + file


def file_of(s: int) -> int:
    """Return the file (0 for a, 7 for h) of square ``s``."""
    return s & 7


def rank_of(s: int) -> int:
    """Return the rank (0 for rank 1, 7 for rank 8) of square ``s``."""
    return s >> 3


def square_bb(s: int) -> int:
    """Return the bitboard holding only square ``s``."""
    return 1 << _check_square(s)


def more_than_one(b: int) -> bool:
    """Return True if ``b`` has more than one square set."""
    return bool(b & (b - 1))


def rank_bb(r: int) -> int:
    """Return the bitboard of every square on rank ``r``."""
    return RANK_1_BB << (8 * r)


def file_bb(f: int) -> int:
    """Return the bitboard of every square on file ``f``."""
    return FILE_A_BB << f


# ---------------------------------------------------------------------------
# Shifts and pawn attacks
# ---------------------------------------------------------------------------

_NOT_FILE_A = MASK64 & ~FILE_A_BB
_NOT_FILE_H = MASK64 & ~FILE_H_BB

_SHIFTS = {
    8: (MASK64, 8),
    -8: (MASK64, -8),
    16: (MASK64, 16),
    -16: (MASK64, -16),
    1: (_NOT_FILE_H, 1),
    -1: (_NOT_FILE_A, -1),
    9: (_NOT_FILE_H, 9),
    7: (_NOT_FILE_A, 7),
    -7: (_NOT_FILE_H, -7),
    -9: (_NOT_FILE_A, -9),
}


def shift(b: int, direction: int) -> int:
    """Move every square of ``b`` one step (or two, straight up or down) in ``direction``.

    Squares falling off the board are dropped; an unsupported direction
    yields an empty bitboard.
    """
    try:
        mask, amount = _SHIFTS[int(direction)]
    except KeyError:
        return 0
    b &= mask
    return (b << amount if amount > 0 else b >> -amount) & MASK64


def pawn_attacks_bb(b: int, color: Color) -> int:
    """Return the squares attacked by pawns of ``color`` standing on ``b``."""
    if color == Color.WHITE:
        return shift(b, Direction.NORTH_WEST) | shift(b, Direction.NORTH_EAST)
    return shift(b, Direction.SOUTH_WEST) | shift(b, Direction.SOUTH_EAST)


# ---------------------------------------------------------------------------
# Bit manipulation
# ---------------------------------------------------------------------------


def popcount(b: int) -> int:
    """Return the number of squares set in ``b``."""
    return (b & MASK64).bit_count()


def lsb(b: int) -> int:
    """Return the least significant square of a non-empty bitboard."""
    if not b:
        raise ValueError("lsb of an empty bitboard")
    return (b & -b).bit_length() - 1


def msb(b: int) -> int:
    """Return the most significant square of a non-empty bitboard."""
    if not b:
        raise ValueError("msb of an empty bitboard")
    return b.bit_length() - 1


def least_significant_square_bb(b: int) -> int:
    """Return the bitboard of the least significant square of a non-empty bitboard."""
    if not b:
        raise ValueError("least significant square of an empty bitboard")
    return b & -b


def pop_lsb(b: int) -> Tuple[int, int]:
    """Return the least significant square of ``b`` and ``b`` without it."""
    return lsb(b), b & (b - 1)


def iter_squares(b: int) -> Iterator[int]:
    """Yield the squares of ``b`` from the least to the most significant."""
    while b:
        low = b & -b
        yield low.bit_length() - 1
        b ^= low


# ---------------------------------------------------------------------------
# Distances
# ---------------------------------------------------------------------------


def file_distance(x: int, y: int) -> int:
    """Return the number of files between squares ``x`` and ``y``."""
    return abs(file_of(x) - file_of(y))


def rank_distance(x: int, y: int) -> int:
    """Return the number of ranks between squares ``x`` and ``y``."""
    return abs(rank_of(x) - rank_of(y))


_SQUARE_DISTANCE: List[List[int]] = [
    [max(file_distance(s1, s2), rank_distance(s1, s2)) for s2 in range(SQUARE_NB)]
    for s1 in range(SQUARE_NB)
]


def distance(x: int, y: int) -> int:
    """Return the number of king steps from square ``x`` to square ``y``."""
    return _SQUARE_DISTANCE[_check_square(x)][_check_square(y)]


def edge_distance(f: int) -> int:
    """Return the distance of file ``f`` from the nearer board edge."""
    return min(f, 7 - f)


# ---------------------------------------------------------------------------
# Sliding attacks
# ---------------------------------------------------------------------------


def _safe_destination(s: int, step: int) -> int:
    to = s + step
    if 0 <= to < SQUARE_NB and _SQUARE_DISTANCE[s][to] <= 2:
        return 1 << to
    return 0


def _ray(s: int, step: int) -> Tuple[int, ...]:
    bits = []
    while _safe_destination(s, step):
        s += step
        bits.append(1 << s)
    return tuple(bits)


_ROOK_DIRECTIONS = (Direction.NORTH, Direction.SOUTH, Direction.EAST, Direction.WEST)
_BISHOP_DIRECTIONS = (
    Direction.NORTH_EAST,
    Direction.SOUTH_EAST,
    Direction.SOUTH_WEST,
    Direction.NORTH_WEST,
)

_RAYS = {
    PieceType.ROOK: [tuple(_ray(s, d) for d in _ROOK_DIRECTIONS) for s in range(SQUARE_NB)],
    PieceType.BISHOP: [tuple(_ray(s, d) for d in _BISHOP_DIRECTIONS) for s in range(SQUARE_NB)],
}


def _ray_attacks(rays: Tuple[Tuple[int, ...], ...], occupied: int) -> int:
    attacks = 0
    for ray in rays:
        for bit in ray:
            attacks |= bit
            if occupied & bit:
                break
    return attacks


def sliding_attack(pt: PieceType, s: int, occupied: int) -> int:
    """Compute the attacks of a slider on ``s`` by walking its rays.

    Each ray stops at (and includes) the first occupied square.
    """
    _check_square(s)
    if pt == PieceType.ROOK or pt == PieceType.BISHOP:
        return _ray_attacks(_RAYS[PieceType(pt)][s], occupied)
    if pt == PieceType.QUEEN:
        return _ray_attacks(_RAYS[PieceType.ROOK][s], occupied) | _ray_attacks(
            _RAYS[PieceType.BISHOP][s], occupied
        )
    raise ValueError(f"{pt!r} is not a sliding piece")


# ---------------------------------------------------------------------------
# Magic bitboards
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Magic:
    """Magic bitboard data for one slider on one square."""

    mask: int
    magic: int
    shift: int
    attacks: Tuple[int, ...]

    def index(self, occupied: int) -> int:
        """Return the attack table index for the given occupancy."""
        return (((occupied & self.mask) * self.magic) & MASK64) >> self.shift

    def attacks_bb(self, occupied: int) -> int:
        """Return the attacks for the given occupancy."""
        return self.attacks[self.index(occupied)]


# PRNG seeds that find a working magic quickly, one per rank.
_MAGIC_SEEDS = (728, 10316, 55013, 32803, 12281, 15100, 16645, 255)


def _find_magic(pt: PieceType, s: int) -> Magic:
    # Board edges are not part of the relevant occupancy.
    edges = ((RANK_1_BB | RANK_8_BB) & ~rank_bb(rank_of(s))) | (
        (FILE_A_BB | FILE_H_BB) & ~file_bb(file_of(s))
    )
    mask = sliding_attack(pt, s, 0) & ~edges & MASK64
    index_shift = 64 - popcount(mask)

    # Enumerate every subset of the mask (carry-rippler) with its attacks.
    occupancy: List[int] = []
    reference: List[int] = []
    b = 0
    while True:
        occupancy.append(b)
        reference.append(sliding_attack(pt, s, b))
        b = (b - mask) & mask
        if not b:
            break

    size = len(occupancy)
    attacks = [0] * size
    epoch = [0] * size
    attempt = 0
    rng = PRNG(_MAGIC_SEEDS[rank_of(s)])
    pairs = list(zip(occupancy, reference))

    while True:
        magic = 0
        while popcount(((magic * mask) & MASK64) >> 56) < 6:
            magic = rng.sparse_rand()

        attempt += 1
        for occ, ref in pairs:
            idx = ((occ * magic) & MASK64) >> index_shift
            if epoch[idx] < attempt:
                epoch[idx] = attempt
                attacks[idx] = ref
            elif attacks[idx] != ref:
                break
        else:
            return Magic(mask, magic, index_shift, tuple(attacks))


def _init_magics(pt: PieceType) -> List[Magic]:
    return [_find_magic(pt, s) for s in range(SQUARE_NB)]


_BISHOP_MAGICS = _init_magics(PieceType.BISHOP)
_ROOK_MAGICS = _init_magics(PieceType.ROOK)

#: ``MAGICS[s][0]`` is the bishop magic of square ``s``, ``MAGICS[s][1]`` the rook magic.
MAGICS: Tuple[Tuple[Magic, Magic], ...] = tuple(zip(_BISHOP_MAGICS, _ROOK_MAGICS))


# ---------------------------------------------------------------------------
# Attack tables
# ---------------------------------------------------------------------------

_PSEUDO_ATTACKS: List[List[int]] = [[0] * SQUARE_NB for _ in PieceType]
_PAWN_ATTACKS: List[List[int]] = [[0] * SQUARE_NB for _ in Color]
_LINE_BB: List[List[int]] = [[0] * SQUARE_NB for _ in range(SQUARE_NB)]
_BETWEEN_BB: List[List[int]] = [[0] * SQUARE_NB for _ in range(SQUARE_NB)]


def _slider_attacks(pt: PieceType, s: int, occupied: int) -> int:
    if pt == PieceType.BISHOP:
        return _BISHOP_MAGICS[s].attacks_bb(occupied)
    return _ROOK_MAGICS[s].attacks_bb(occupied)


def _init_tables() -> None:
    for s1 in range(SQUARE_NB):
        bb1 = 1 << s1
        _PAWN_ATTACKS[Color.WHITE][s1] = pawn_attacks_bb(bb1, Color.WHITE)
        _PAWN_ATTACKS[Color.BLACK][s1] = pawn_attacks_bb(bb1, Color.BLACK)

        king = 0
        for step in (-9, -8, -7, -1, 1, 7, 8, 9):
            king |= _safe_destination(s1, step)
        _PSEUDO_ATTACKS[PieceType.KING][s1] = king

        knight = 0
        for step in (-17, -15, -10, -6, 6, 10, 15, 17):
            knight |= _safe_destination(s1, step)
        _PSEUDO_ATTACKS[PieceType.KNIGHT][s1] = knight

        bishop = _slider_attacks(PieceType.BISHOP, s1, 0)
        rook = _slider_attacks(PieceType.ROOK, s1, 0)
        _PSEUDO_ATTACKS[PieceType.BISHOP][s1] = bishop
        _PSEUDO_ATTACKS[PieceType.ROOK][s1] = rook
        _PSEUDO_ATTACKS[PieceType.QUEEN][s1] = bishop | rook

        for pt in (PieceType.BISHOP, PieceType.ROOK):
            empty_from = _PSEUDO_ATTACKS[pt][s1]
            for s2 in range(SQUARE_NB):
                bb2 = 1 << s2
                if empty_from & bb2:
                    _LINE_BB[s1][s2] = (empty_from & _slider_attacks(pt, s2, 0)) | bb1 | bb2
                    _BETWEEN_BB[s1][s2] = _slider_attacks(pt, s1, bb2) & _slider_attacks(
                        pt, s2, bb1
                    )
                _BETWEEN_BB[s1][s2] |= bb2


_init_tables()


def line_bb(s1: int, s2: int) -> int:
    """Return the whole line, edge to edge, through ``s1`` and ``s2``.

    Squares not on a common file, rank or diagonal give an empty bitboard.
    """
    return _LINE_BB[_check_square(s1)][_check_square(s2)]


def between_bb(s1: int, s2: int) -> int:
    """Return the squares from ``s1`` (excluded) to ``s2`` (included).

    Squares not on a common file, rank or diagonal give just ``s2``.
    """
    return _BETWEEN_BB[_check_square(s1)][_check_square(s2)]


def aligned(s1: int, s2: int, s3: int) -> bool:
    """Return True if the three squares lie on one straight or diagonal line."""
    return bool(line_bb(s1, s2) & square_bb(s3))


def pseudo_attacks(pt: PieceType, s: int, color: Optional[Color] = None) -> int:
    """Return the attacks of piece type ``pt`` on ``s`` on an empty board.

    Pawns need a ``color``.
    """
    _check_square(s)
    if pt == PieceType.PAWN:
        if color is None:
            raise ValueError("pawn attacks need a color")
        return _PAWN_ATTACKS[Color(color)][s]
    return _PSEUDO_ATTACKS[PieceType(pt)][s]


def attacks_bb(pt: PieceType, s: int, occupied: int = 0) -> int:
    """Return the attacks of piece type ``pt`` on ``s`` given the occupied squares.

    Sliding attacks stop at the first occupied square. Pawns are not accepted.
    """
    _check_square(s)
    if pt == PieceType.PAWN:
        raise ValueError("pawn attacks depend on color; use pseudo_attacks")
    if pt == PieceType.BISHOP:
        return _BISHOP_MAGICS[s].attacks_bb(occupied)
    if pt == PieceType.ROOK:
        return _ROOK_MAGICS[s].attacks_bb(occupied)
    if pt == PieceType.QUEEN:
        return _BISHOP_MAGICS[s].attacks_bb(occupied) | _ROOK_MAGICS[s].attacks_bb(occupied)
    return _PSEUDO_ATTACKS[PieceType(pt)][s]


# ---------------------------------------------------------------------------
# Display
# ---------------------------------------------------------------------------

_BORDER = "+---+---+---+---+---+---+---+---+\n"


def pretty(b: int) -> str:
    """Return an ASCII drawing of ``b``, rank 8 at the top."""
    parts = [_BORDER]
    for r in range(7, -1, -1):
        for f in range(8):
            parts.append("| X " if b & square_bb(make_square(f, r)) else "|   ")
        parts.append(f"| {1 + r}\n{_BORDER}")
    parts.append("  a   b   c   d   e   f   g   h\n")
    return "".join(parts)