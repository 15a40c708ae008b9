import random

import pytest

from chesscore.bitboard import (
    FILE_A,
    FILE_C,
    FILE_D,
    FILE_E,
    FILE_F,
    FILE_G,
    FILE_H,
    RANK_1,
    RANK_2,
    RANK_4,
    RANK_5,
    RANK_6,
    RANK_7,
    RANK_8,
    Color,
    Direction,
    Magic,
    PieceType,
    aligned,
    attacks_bb,
    between_bb,
    distance,
    edge_distance,
    file_bb,
    file_distance,
    file_of,
    least_significant_square_bb,
    line_bb,
    lsb,
    make_square,
    more_than_one,
    msb,
    pawn_attacks_bb,
    pop_lsb,
    popcount,
    pretty,
    pseudo_attacks,
    rank_bb,
    rank_distance,
    rank_of,
    shift,
    sliding_attack,
    square_bb,
)


def sq(file, rank):
    return make_square(file, rank)


def test_square_round_trip():
    for s in range(64):
        assert make_square(file_of(s), rank_of(s)) == s


def test_invalid_squares_raise():
    with pytest.raises(ValueError):
        square_bb(64)
    with pytest.raises(ValueError):
        make_square(8, 0)


def test_bit_scans():
    b = square_bb(sq(FILE_C, RANK_2)) | square_bb(sq(FILE_G, RANK_7))
    assert lsb(b) == sq(FILE_C, RANK_2)
    assert msb(b) == sq(FILE_G, RANK_7)
    assert least_significant_square_bb(b) == square_bb(sq(FILE_C, RANK_2))
    first, rest = pop_lsb(b)
    assert first == sq(FILE_C, RANK_2)
    assert rest == square_bb(sq(FILE_G, RANK_7))
    assert popcount(b) == 2
    assert more_than_one(b)
    assert not more_than_one(rest)


def test_bit_scan_of_empty_raises():
    with pytest.raises(ValueError):
        lsb(0)
    with pytest.raises(ValueError):
        msb(0)


def test_rank_and_file_masks():
    for i in range(8):
        assert popcount(rank_bb(i)) == 8
        assert popcount(file_bb(i)) == 8
        assert popcount(rank_bb(i) & file_bb(i)) == 1


def test_shift_drops_squares_off_board():
    assert shift(rank_bb(RANK_8), Direction.NORTH) == 0
    assert shift(file_bb(FILE_H), Direction.EAST) == 0
    assert shift(file_bb(FILE_A), Direction.WEST) == 0
    assert shift(rank_bb(RANK_1), Direction.NORTH) == rank_bb(RANK_2)


def test_pawn_attacks():
    e4 = square_bb(sq(FILE_E, 3))
    expected = square_bb(sq(FILE_D, RANK_5)) | square_bb(sq(FILE_F, RANK_5))
    assert pawn_attacks_bb(Color.WHITE, e4) == expected
    a2 = square_bb(sq(FILE_A, RANK_2))
    assert pawn_attacks_bb(Color.BLACK, a2) == square_bb(sq(1, RANK_1))


def test_magic_attacks_match_ray_walk():
    rng = random.Random(7)
    for _ in range(300):
        s = rng.randrange(64)
        occupied = rng.getrandbits(64) & rng.getrandbits(64)
        for pt in (PieceType.BISHOP, PieceType.ROOK):
            assert attacks_bb(pt, s, occupied) == sliding_attack(pt, s, occupied)
        assert attacks_bb(PieceType.QUEEN, s, occupied) == (
            sliding_attack(PieceType.BISHOP, s, occupied)
            | sliding_attack(PieceType.ROOK, s, occupied)
        )


def test_rook_on_empty_board_sees_fourteen_squares():
    for s in range(64):
        assert popcount(pseudo_attacks(PieceType.ROOK, s)) == 14


def test_leaper_attacks_invariants():
    for s in range(64):
        king = pseudo_attacks(PieceType.KING, s)
        for t in range(64):
            assert bool(king & square_bb(t)) == (distance(s, t) == 1)
        knight = pseudo_attacks(PieceType.KNIGHT, s)
        for t in range(64):
            if knight & square_bb(t):
                assert {file_distance(s, t), rank_distance(s, t)} == {1, 2}
        assert attacks_bb(PieceType.KNIGHT, s, 0xFFFF) == knight


def test_pawn_piece_type_rejected():
    with pytest.raises(ValueError):
        attacks_bb(PieceType.PAWN, 0, 0)
    with pytest.raises(ValueError):
        pseudo_attacks(PieceType.PAWN, 0)


def test_line_bb_documented_example():
    c4, f7 = sq(FILE_C, 3), sq(FILE_F, RANK_7)
    diagonal = 0
    for f in range(7):
        diagonal |= square_bb(sq(FILE_A + f, RANK_2 + f))
    assert line_bb(c4, f7) == diagonal
    assert line_bb(sq(FILE_A, RANK_1), sq(1, 3)) == 0


def test_between_bb_documented_examples():
    c4, f7 = sq(FILE_C, 3), sq(FILE_F, RANK_7)
    expected = square_bb(sq(FILE_D, RANK_5)) | square_bb(sq(FILE_E, RANK_6)) | square_bb(f7)
    assert between_bb(c4, f7) == expected
    f8 = sq(FILE_F, RANK_8)
    assert between_bb(sq(FILE_E, RANK_6), f8) == square_bb(f8)


def test_aligned():
    assert aligned(sq(FILE_A, RANK_1), sq(FILE_D, RANK_4), sq(FILE_H, RANK_8))
    assert not aligned(sq(FILE_A, RANK_1), sq(FILE_D, RANK_4), sq(FILE_H, RANK_7))


def test_distance_is_symmetric_king_steps():
    for s1 in range(0, 64, 5):
        for s2 in range(64):
            assert distance(s1, s2) == distance(s2, s1)
            assert distance(s1, s2) == max(file_distance(s1, s2), rank_distance(s1, s2))


def test_edge_distance():
    assert edge_distance(FILE_A) == 0
    assert edge_distance(FILE_H) == 0
    assert edge_distance(FILE_D) == edge_distance(FILE_E)


def test_magic_index_worked_example():
    magic = Magic(mask=0b11, magic=1 << 62, shift=62, attacks=[10, 11, 12, 13])
    assert magic.index(0b01) == 1
    assert magic.index(0b10) == 2
    assert magic.index(0b11 | (1 << 40)) == 3
    assert magic.attacks_bb(0) == 10


def test_pretty_layout():
    b = square_bb(sq(FILE_A, RANK_1)) | square_bb(sq(FILE_H, RANK_8))
    text = pretty(b)
    lines = text.splitlines()
    assert lines[0] == "+---+---+---+---+---+---+---+---+"
    assert lines[-1] == "  a   b   c   d   e   f   g   h"
    assert text.count("| X ") == popcount(b)
    assert lines[1].endswith("| X | 8")
    assert lines[15].startswith("| X |")
    assert lines[15].endswith("| 1")