"""Command lists for the ``bench`` and ``benchmark`` commands."""

from __future__ import annotations

import os
import re
import struct
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from chesscore.benchmark_positions import benchmark_games, default_bench_entries

__all__ = ["BenchmarkSetup", "setup_bench", "setup_benchmark"]

# Hash per thread, chosen so that about half of it is used once all positions
# of the current sequence have been searched.
TT_SIZE_PER_THREAD = 128
DEFAULT_DURATION_S = 150

_INT32_MIN = -(1 << 31)
_INT32_MAX = (1 << 31) - 1
_LEADING_INT = re.compile(r"[+-]?\d+")


@dataclass
class BenchmarkSetup:
    """Settings and UCI commands for a timed benchmark run."""

    tt_size: int = 0
    threads: int = 0
    commands: list[str] = field(default_factory=list)
    original_invocation: str = ""
    filled_invocation: str = ""


def _tokens(args: str | Iterable[str] | None) -> list[str]:
    if args is None:
        return []
    if isinstance(args, str):
        return args.split()
    return [token for arg in args for token in arg.split()]


def _int_values(tokens: list[str]) -> Iterator[int]:
    """Yield integers read from the tokens, stopping at the first that fails."""
    for token in tokens:
        match = _LEADING_INT.match(token)
        if match is None:
            return
        value = int(match.group())
        if not _INT32_MIN <= value <= _INT32_MAX:
            return
        yield value
        if match.end() != len(token):
            # The rest of the token cannot start another integer.
            return


def _f32(x: float) -> float:
    """Round a value to single precision."""
    return struct.unpack("f", struct.pack("f", x))[0]


def _corrected_time(ply: int) -> float:
    # Time per move fitted on long games: ms = 50000 / (ply + 15).
    return 50000.0 / (float(ply) + 15.0)


def setup_bench(current_fen: str, args: str | Iterable[str] | None = None) -> list[str]:
    """Build the UCI commands run by ``bench``.

    The arguments are, in order and all optional: hash size in MB, number of
    threads, limit value, position source (``default``, ``current`` or a file
    of FENs) and limit type (``depth``, ``perft``, ``nodes``, ``movetime`` or
    ``eval``). Raises OSError when the position file cannot be opened.
    """
    tokens = iter(_tokens(args))
    tt_size = next(tokens, "16")
    threads = next(tokens, "1")
    limit = next(tokens, "13")
    fen_file = next(tokens, "default")
    limit_type = next(tokens, "depth")

    go = "eval" if limit_type == "eval" else f"go {limit_type} {limit}"

    if fen_file == "default":
        fens = default_bench_entries()
    elif fen_file == "current":
        fens = [current_fen]
    else:
        try:
            with open(fen_file, encoding="utf-8", newline="") as handle:
                fens = [line.rstrip("\n") for line in handle]
        except OSError as exc:
            raise OSError(f"Unable to open file {fen_file}") from exc
        fens = [fen for fen in fens if fen]

    commands = [
        f"setoption name Threads value {threads}",
        f"setoption name Hash value {tt_size}",
        "ucinewgame",
    ]
    for fen in fens:
        if "setoption" in fen:
            commands.append(fen)
        else:
            commands.append(f"position fen {fen}")
            commands.append(go)
    return commands


def setup_benchmark(
    args: str | Iterable[str] | None = None, default_threads: int | None = None
) -> BenchmarkSetup:
    """Build a timed benchmark over the stored games.

    The optional arguments are the number of threads, the hash size in MB and
    the desired total duration in seconds. Missing threads default to
    ``default_threads``, or the number of CPUs when that is None.
    """
    if default_threads is None:
        default_threads = os.cpu_count() or 1

    values = _int_values(_tokens(args))
    setup = BenchmarkSetup()
    original: list[str] = []

    threads = next(values, None)
    if threads is None:
        setup.threads = default_threads
    else:
        setup.threads = threads
        original.append(str(threads))

    tt_size = next(values, None) if threads is not None else None
    if tt_size is None:
        setup.tt_size = TT_SIZE_PER_THREAD * setup.threads
    else:
        setup.tt_size = tt_size
        original.append(str(tt_size))

    desired = next(values, None) if tt_size is not None else None
    if desired is None:
        desired_time_s = DEFAULT_DURATION_S
    else:
        desired_time_s = desired
        original.append(str(desired))

    setup.original_invocation = " ".join(original)
    setup.filled_invocation = f"{setup.threads} {setup.tt_size} {desired_time_s}"

    games = benchmark_games()

    total_time = 0.0
    for game in games:
        setup.commands.append("ucinewgame")
        for ply, _ in enumerate(game, start=1):
            total_time = _f32(total_time + _f32(_corrected_time(ply)))

    time_scale = _f32(_f32(float(desired_time_s * 1000)) / total_time)

    for game in games:
        setup.commands.append("ucinewgame")
        for ply, fen in enumerate(game, start=1):
            setup.commands.append(f"position fen {fen}")
            movetime = int(_corrected_time(ply) * time_scale)
            setup.commands.append(f"go movetime {movetime}")

    return setup