import pytest

from chesscore.benchmark import BenchmarkSetup, setup_bench, setup_benchmark
from chesscore.benchmark_positions import benchmark_games, default_bench_entries

START_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"


def _movetimes(setup: BenchmarkSetup) -> list[int]:
    return [int(c.split()[-1]) for c in setup.commands if c.startswith("go movetime ")]


def test_setup_bench_defaults_header():
    commands = setup_bench(START_FEN)
    assert commands[:3] == [
        "setoption name Threads value 1",
        "setoption name Hash value 16",
        "ucinewgame",
    ]
    assert commands[3] == "setoption name UCI_Chess960 value false"
    assert commands[4] == "position fen " + START_FEN
    assert commands[5] == "go depth 13"


def test_setup_bench_default_length():
    entries = default_bench_entries()
    setoptions = [e for e in entries if "setoption" in e]
    commands = setup_bench(START_FEN, [])
    assert len(commands) == 3 + len(setoptions) + 2 * (len(entries) - len(setoptions))
    assert commands[-1] == "setoption name UCI_Chess960 value false"


def test_setup_bench_custom_arguments():
    commands = setup_bench("8/8/8/8/8/6k1/6p1/6K1 w - -", "64 4 5000 current movetime")
    assert commands == [
        "setoption name Threads value 4",
        "setoption name Hash value 64",
        "ucinewgame",
        "position fen 8/8/8/8/8/6k1/6p1/6K1 w - -",
        "go movetime 5000",
    ]


def test_setup_bench_eval_limit_type():
    commands = setup_bench(START_FEN, ["16", "1", "5", "current", "eval"])
    assert commands[-1] == "eval"
    assert commands[-2] == "position fen " + START_FEN


def test_setup_bench_reads_file(tmp_path):
    path = tmp_path / "fens.txt"
    path.write_text(START_FEN + "\n\nsetoption name UCI_Chess960 value true\n7k/7P/6K1/8/3B4/8/8/8 b - -\n")
    commands = setup_bench("", ["16", "1", "5", str(path), "perft"])
    assert commands[3:] == [
        "position fen " + START_FEN,
        "go perft 5",
        "setoption name UCI_Chess960 value true",
        "position fen 7k/7P/6K1/8/3B4/8/8/8 b - -",
        "go perft 5",
    ]


def test_setup_bench_missing_file(tmp_path):
    with pytest.raises(OSError):
        setup_bench("", ["16", "1", "5", str(tmp_path / "absent.txt")])


def test_setup_benchmark_defaults():
    setup = setup_benchmark([], default_threads=4)
    assert setup.threads == 4
    assert setup.tt_size == 128 * 4
    assert setup.original_invocation == ""
    assert setup.filled_invocation == "4 512 150"


def test_setup_benchmark_explicit_arguments():
    setup = setup_benchmark("2 64 10", default_threads=8)
    assert setup.threads == 2
    assert setup.tt_size == 64
    assert setup.original_invocation == "2 64 10"
    assert setup.filled_invocation == "2 64 10"


def test_setup_benchmark_partial_arguments():
    setup = setup_benchmark(["3"], default_threads=8)
    assert setup.threads == 3
    assert setup.tt_size == 128 * 3
    assert setup.original_invocation == "3"
    assert setup.filled_invocation == "3 384 150"


def test_setup_benchmark_bad_token_stops_parsing():
    setup = setup_benchmark(["abc", "64"], default_threads=2)
    assert setup.threads == 2
    assert setup.tt_size == 256
    assert setup.original_invocation == ""


def test_setup_benchmark_command_structure():
    games = benchmark_games()
    setup = setup_benchmark([], default_threads=1)
    positions = sum(len(g) for g in games)
    assert len(setup.commands) == 2 * len(games) + 2 * positions
    assert setup.commands[: len(games) + 1] == ["ucinewgame"] * (len(games) + 1)
    assert setup.commands[len(games) + 1] == "position fen " + games[0][0]
    assert setup.commands.count("ucinewgame") == 2 * len(games)


def test_setup_benchmark_total_time_matches_duration():
    positions = sum(len(g) for g in benchmark_games())
    for seconds in (10, 150):
        total = sum(_movetimes(setup_benchmark([ "1", "16", str(seconds)])))
        assert total <= seconds * 1000 + 1
        assert total >= seconds * 1000 - positions - 1


def test_setup_benchmark_times_decrease_within_game():
    setup = setup_benchmark("1 16 150")
    games = benchmark_games()
    times = _movetimes(setup)
    start = 0
    for game in games:
        chunk = times[start : start + len(game)]
        assert chunk == sorted(chunk, reverse=True)
        assert all(t > 0 for t in chunk)
        start += len(game)
    assert start == len(times)