import os

import pytest

from chesscore.misc import (
    Prng,
    engine_info,
    engine_version_info,
    get_binary_directory,
    get_working_directory,
    is_whitespace,
    move_to_front,
    mul_hi64,
    read_file_to_string,
    remove_whitespace,
    split,
    str_to_size_t,
)


def test_prng_is_deterministic():
    a = Prng(1070372)
    b = Prng(1070372)
    assert [a.rand64() for _ in range(20)] == [b.rand64() for _ in range(20)]


def test_prng_outputs_fit_in_64_bits():
    rng = Prng(8977)
    values = [rng.rand64() for _ in range(200)]
    assert all(0 <= v < 2**64 for v in values)
    assert len(set(values)) == len(values)


def test_prng_different_seeds_differ():
    assert Prng(728).rand64() != Prng(10316).rand64() or Prng(728).rand64() == 0


def test_prng_zero_seed_rejected():
    with pytest.raises(ValueError):
        Prng(0)


def test_sparse_rand_is_and_of_three_draws():
    a = Prng(44560)
    b = Prng(44560)
    for _ in range(10):
        expected = b.rand64() & b.rand64() & b.rand64()
        assert a.sparse_rand() == expected


def test_sparse_rand_has_fewer_bits():
    dense = Prng(54343)
    sparse = Prng(54343)
    dense_bits = sum(bin(dense.rand64()).count("1") for _ in range(300))
    sparse_bits = sum(bin(sparse.sparse_rand()).count("1") for _ in range(300))
    assert sparse_bits < dense_bits // 2


def test_engine_info_forms():
    version = engine_version_info()
    assert version.endswith("17.1")
    uci = engine_info(True)
    plain = engine_info(False)
    assert uci.startswith(version + "\nid author ")
    assert plain.startswith(version + " by ")
    assert engine_info() == plain


def test_split_basic():
    assert split("a,b,c", ",") == ["a", "b", "c"]
    assert split("a,", ",") == ["a", ""]
    assert split("abc", "::") == ["abc"]
    assert split("x::y", "::") == ["x", "y"]


def test_split_empty_string():
    assert split("", ",") == []


def test_split_empty_delimiter_rejected():
    with pytest.raises(ValueError):
        split("abc", "")


def test_remove_whitespace():
    assert remove_whitespace(" a\tb\nc \r\v\f") == "abc"
    assert remove_whitespace("") == ""


def test_is_whitespace():
    assert is_whitespace("")
    assert is_whitespace(" \t\n")
    assert not is_whitespace(" a ")


def test_str_to_size_t_parses():
    assert str_to_size_t("42") == 42
    assert str_to_size_t("  17abc") == 17
    assert str_to_size_t("+5") == 5


def test_str_to_size_t_negative_wraps():
    assert str_to_size_t("-1") == 2**64 - 1


def test_str_to_size_t_errors():
    with pytest.raises(ValueError):
        str_to_size_t("abc")
    with pytest.raises(ValueError):
        str_to_size_t("")
    with pytest.raises(OverflowError):
        str_to_size_t(str(2**64))


def test_read_file_to_string_roundtrip(tmp_path):
    data = b"\x00\x01binary\r\ncontent\xff"
    path = tmp_path / "data.bin"
    path.write_bytes(data)
    assert read_file_to_string(path) == data
    assert read_file_to_string(str(path)) == data


def test_read_file_to_string_missing(tmp_path):
    assert read_file_to_string(tmp_path / "missing.bin") is None


def test_mul_hi64_invariants():
    for a in (0, 1, 12345, 2**63 + 7, 2**64 - 1):
        assert mul_hi64(a, 1) == 0
        assert mul_hi64(a, 2**32) == a >> 32
        assert mul_hi64(a, 2**63) == a >> 1
    assert mul_hi64(2**64 - 1, 2**64 - 1) == 2**64 - 2


def test_mul_hi64_commutative():
    assert mul_hi64(0xDEADBEEFCAFEBABE, 0x123456789ABCDEF) == mul_hi64(
        0x123456789ABCDEF, 0xDEADBEEFCAFEBABE
    )


def test_working_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert get_working_directory() == os.getcwd()


def test_binary_directory_with_path():
    assert get_binary_directory("/usr/bin/engine") == "/usr/bin/"


def test_binary_directory_bare_name(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert get_binary_directory("engine") == os.getcwd() + os.sep


def test_binary_directory_dot_prefix(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    argv0 = "." + os.sep + "engine"
    assert get_binary_directory(argv0) == os.getcwd() + os.sep


def test_binary_directory_parent_not_replaced():
    assert get_binary_directory("../bin/engine") == "../bin/"


def test_move_to_front():
    items = [1, 2, 3, 4]
    move_to_front(items, lambda x: x == 3)
    assert items == [3, 1, 2, 4]


def test_move_to_front_first_match_only():
    items = ["a", "bb", "cc", "d"]
    move_to_front(items, lambda x: len(x) == 2)
    assert items == ["bb", "a", "cc", "d"]


def test_move_to_front_no_match():
    items = [1, 2, 3]
    move_to_front(items, lambda x: x > 10)
    assert items == [1, 2, 3]