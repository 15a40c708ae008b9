# chesscore

Low-level building blocks for a chess engine, in plain Python with no
third-party dependencies.

## Modules

- **`chesscore.bitboard`**: bitboards held as Python integers (bit 0 is a1,
  bit 63 is h8). Square helpers (`make_square`, `file_of`, `rank_of`,
  `square_bb`), file and rank masks (`file_bb`, `rank_bb`), `shift` by a
  `Direction`, `pawn_attacks_bb`, empty-board attacks (`pseudo_attacks`),
  attacks with a given occupancy (`attacks_bb`, using the `Magic` tables for
  bishops, rooks and queens; `sliding_attack` walks the rays directly),
  `line_bb`, `between_bb`, `aligned`, the distance helpers (`distance`,
  `file_distance`, `rank_distance`, `edge_distance`), bit scanning
  (`popcount`, `lsb`, `msb`, `least_significant_square_bb`, `pop_lsb`, which
  returns the square and the remaining bitboard) and `pretty`, which draws a
  bitboard as ASCII. The enums `Color`, `PieceType` and `Direction` name the
  values these functions take. The attack tables are built on first use.
- **`chesscore.misc`**: the xorshift64* generator `Prng` (`rand64`,
  `sparse_rand`), `mul_hi64`, string helpers (`split`, `remove_whitespace`,
  `is_whitespace`, `str_to_size_t`), `read_file_to_string` (the file's bytes,
  or `None` when it cannot be opened), `get_working_directory`,
  `get_binary_directory`, `move_to_front`, and the identification strings
  `engine_version_info` and `engine_info`.
- **`chesscore.debugstats`**: `DebugStats`, a thread-safe set of numbered
  slots (32 by default) collecting hit rates (`hit_on`), means (`mean_of`),
  standard deviations (`stdev_of`), extremes (`extremes_of`) and correlations
  (`correl_of`). `report` returns one line per slot that has data; `clear`
  resets them all. A slot outside the range raises `IndexError`.
- **`chesscore.benchmark_positions`**: the built-in positions.
  `default_bench_entries` returns FEN strings mixed with `setoption` commands;
  `benchmark_games` returns five games as lists of FEN strings.
- **`chesscore.benchmark`**: `setup_bench` builds the UCI commands of a bench
  run; `setup_benchmark` builds a timed run over the stored games and returns
  a `BenchmarkSetup` (`tt_size`, `threads`, `commands`,
  `original_invocation`, `filled_invocation`).

## Installing

Python 3.10 or later. No runtime dependencies; the `test` extra adds pytest.

## Examples

```python
from chesscore import bitboard

e4 = bitboard.make_square(4, 3)
print(bitboard.pretty(bitboard.square_bb(e4)))

b = bitboard.file_bb(0) | bitboard.rank_bb(0)
print(bitboard.popcount(b), bitboard.lsb(b), bitboard.msb(b))

rook = bitboard.attacks_bb(bitboard.PieceType.ROOK, e4, bitboard.square_bb(e4 + 16))
print(bitboard.pretty(rook))
```

```python
from chesscore.misc import Prng, split, mul_hi64

rng = Prng(1070372)
print(rng.rand64(), rng.sparse_rand())
print(split("a,b,,c", ","))   # ['a', 'b', '', 'c']
print(mul_hi64(2**63, 4))      # 2
```

```python
from chesscore.debugstats import DebugStats

stats = DebugStats()
for value in (3, 5, 8):
    stats.mean_of(value)
    stats.hit_on(value > 4)
print(stats.report())
```

```python
from chesscore.benchmark import setup_bench, setup_benchmark

start = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"
for command in setup_bench(start, "16 1 13 default depth"):
    print(command)

timed = setup_benchmark("4 512 60")
print(timed.filled_invocation, len(timed.commands))
```

`setup_bench` takes, in order and all optional: hash size in MB, number of
threads, the limit, where the positions come from (`default`, `current` or
the name of a file with one FEN per line) and the limit type (`depth`,
`perft`, `nodes`, `movetime` or `eval`). Missing arguments default to
`16 1 13 default depth`. A position file that cannot be opened raises
`OSError`.

`setup_benchmark` takes threads, hash size in MB and total duration in
seconds. Missing threads default to `default_threads`, or the CPU count when
that is `None`; missing hash is 128 MB per thread; missing duration is 150
seconds.

## What it does not do

chesscore has no board position, move generation, evaluation or search, and
no UCI command loop or executable. The command lists it builds are plain
strings for some other program to run.