import pytest

from chesscore.benchmark_positions import benchmark_games, default_bench_entries


def _board_is_valid(board: str) -> bool:
    ranks = board.split("/")
    if len(ranks) != 8:
        return False
    for rank in ranks:
        width = 0
        for ch in rank:
            if ch.isdigit():
                width += int(ch)
            elif ch.lower() in "pnbrqk":
                width += 1
            else:
                return False
        if width != 8:
            return False
    return True


def test_defaults_start_and_end_with_chess960_off():
    entries = default_bench_entries()
    assert entries[0] == "setoption name UCI_Chess960 value false"
    assert entries[-1] == "setoption name UCI_Chess960 value false"


def test_defaults_switch_chess960_on_once():
    entries = default_bench_entries()
    assert entries.count("setoption name UCI_Chess960 value true") == 1


def test_defaults_first_position_is_start_position():
    assert default_bench_entries()[1] == "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"


def test_default_fens_are_well_formed():
    for entry in default_bench_entries():
        if "setoption" in entry:
            continue
        fields = entry.split()
        assert _board_is_valid(fields[0]), entry
        assert fields[1] in ("w", "b")
        assert sum(fields[0].count(k) for k in "kK") == 2


def test_some_defaults_carry_moves():
    moves = [e for e in default_bench_entries() if " moves " in e]
    assert moves
    assert all(e.split(" moves ")[1].split() for e in moves)


def test_defaults_returns_fresh_copy():
    first = default_bench_entries()
    first.clear()
    assert default_bench_entries()


def test_five_games():
    assert len(benchmark_games()) == 5


@pytest.mark.parametrize("index", range(5))
def test_game_side_to_move_is_constant(index):
    game = benchmark_games()[index]
    sides = {fen.split()[1] for fen in game}
    assert len(sides) == 1


@pytest.mark.parametrize("index", range(5))
def test_game_move_numbers_consecutive(index):
    game = benchmark_games()[index]
    numbers = [int(fen.split()[5]) for fen in game]
    assert numbers == list(range(numbers[0], numbers[0] + len(numbers)))


@pytest.mark.parametrize("index", range(5))
def test_game_fens_are_well_formed(index):
    for fen in benchmark_games()[index]:
        fields = fen.split()
        assert len(fields) == 6
        assert _board_is_valid(fields[0]), fen


def test_game_sides_alternate_between_games():
    sides = [game[0].split()[1] for game in benchmark_games()]
    assert sides == ["b", "w", "b", "w", "b"]


def test_games_return_fresh_copies():
    games = benchmark_games()
    games[0].clear()
    assert benchmark_games()[0]