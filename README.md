# pointfish

Building blocks for a chess engine, in pure Python with no third-party
dependencies.

- `pointfish.bitboard`: 64-bit bitboards, square helpers, magic-bitboard
  sliding attacks for rooks and bishops, pawn, knight and king attacks,
  line and between tables, and a printable board view.
- `pointfish.misc`: version strings, debug statistics (`DebugStats`), an
  input/output logger (`IOLogger`, `start_logger`) and small string, file
  and path helpers.
- `pointfish.utils`: the xorshift64* generator `PRNG`, `mul_hi64`, `split`,
  `move_to_front` and a millisecond clock `now`.

## Bitboards

Squares are numbered 0 (a1) to 63 (h8), with `square = 8 * rank + file`; a
bitboard is a plain non-negative `int` below `2**64`.

```python
from pointfish.bitboard import (
    PieceType, attacks_bb, iter_squares, make_square, popcount, pretty, square_bb,
)

e4 = make_square(4, 3)
blockers = square_bb(make_square(4, 6))      # a piece on e7
rook = attacks_bb(PieceType.ROOK, e4, blockers)
print(popcount(rook))
print(pretty(rook))
print(list(iter_squares(blockers)))          # [52]
```

- `attacks_bb(pt, s, occupied=0)` gives knight, bishop, rook, queen and king
  attacks; sliding attacks stop at the first occupied square. Pawns are
  rejected with `ValueError`; use `pseudo_attacks(PieceType.PAWN, s, color)`.
- `sliding_attack(pt, s, occupied)` walks the rays directly and matches the
  magic lookup; `MAGICS[s]` holds the bishop and rook `Magic` of each square.
  The magics are searched for when the module is first imported.
- `line_bb(s1, s2)` is the full line through two squares (empty if they are
  not aligned); `between_bb(s1, s2)` runs from `s1` (excluded) to `s2`
  (included), or is just `s2` if they are not aligned; `aligned(s1, s2, s3)`.
- `shift(b, direction)` and `pawn_attacks_bb(b, color)` move whole sets.
- `popcount`, `lsb`, `msb`, `least_significant_square_bb`, and `pop_lsb`,
  which returns `(square, remaining_bitboard)`. The single-bit functions
  raise `ValueError` on an empty bitboard.
- `distance`, `file_distance`, `rank_distance` and `edge_distance`.

Out-of-range squares raise `ValueError`.

## Debug statistics and logging

```python
from pointfish.misc import DebugStats, start_logger

stats = DebugStats()
stats.hit_on(True)
stats.hit_on(False)
stats.mean_of(10, slot=1)
stats.extremes_of(-3, slot=2)
print(stats.report(), end="")
stats.clear()

start_logger("session.log")   # copy stdin/stdout to the file
print("hello")
start_logger("")              # stop and restore the streams
```

There are 32 slots (0 to 31); other slot numbers raise `IndexError`. The
report lists hit rates, means, standard deviations, extremes and
correlation coefficients for every slot that has data. In the log, output
lines are prefixed with `<< ` and input lines with `>> `; a file that
cannot be opened raises `OSError`.

Other helpers: `engine_version_info()` and `engine_info(to_uci=False)`,
`remove_whitespace`, `is_whitespace`, `str_to_size_t` (leading unsigned
decimal, `ValueError` or `OverflowError` on bad input), `read_file_to_string`
(raw bytes, or `None` if the file cannot be opened), `get_working_directory`
and `get_binary_directory(argv0)`.

## Utilities

```python
from pointfish.utils import PRNG, move_to_front, split

rng = PRNG(1070372)           # the seed must be non-zero
print(rng.rand(), rng.sparse_rand())
print(split("a,b,,c", ","))   # ['a', 'b', '', 'c']

items = [3, 5, 8, 1]
move_to_front(items, lambda x: x > 4)
print(items)                  # [5, 3, 8, 1]
```

## What this package does not do

It holds no board position, move generator, search, evaluation or UCI
command loop, and it has no command to run and no benchmark driver. It
provides the bitboard and helper layers such a program would be built on.

## Tests

The test suite uses pytest, available through the `test` extra.