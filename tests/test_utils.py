import pytest

from pointfish.utils import PRNG, move_to_front, mul_hi64, now, split

MASK64 = (1 << 64) - 1


def test_prng_zero_seed_rejected():
    with pytest.raises(ValueError):
        PRNG(0)


def test_prng_is_deterministic():
    a = PRNG(8977)
    b = PRNG(8977)
    assert [a.rand() for _ in range(50)] == [b.rand() for _ in range(50)]


def test_prng_different_seeds_differ():
    a = PRNG(728)
    b = PRNG(10316)
    assert [a.rand() for _ in range(10)] != [b.rand() for _ in range(10)]


def test_prng_values_fit_in_64_bits():
    rng = PRNG(44560)
    values = [rng.rand() for _ in range(1000)]
    assert all(0 <= v <= MASK64 for v in values)
    assert max(values) > (1 << 60)


def test_sparse_rand_is_and_of_three_rands():
    sparse = PRNG(54343)
    plain = PRNG(54343)
    for _ in range(20):
        expected = plain.rand() & plain.rand() & plain.rand()
        assert sparse.sparse_rand() == expected


def test_sparse_rand_has_few_bits():
    rng = PRNG(38998)
    total = sum(bin(rng.sparse_rand()).count("1") for _ in range(2000))
    average = total / 2000
    assert 4 < average < 12


def test_mul_hi64_small_product_is_zero():
    assert mul_hi64(12345, 67890) == 0


def test_mul_hi64_is_symmetric():
    rng = PRNG(5731)
    for _ in range(50):
        a, b = rng.rand(), rng.rand()
        assert mul_hi64(a, b) == mul_hi64(b, a)


def test_mul_hi64_bounded_by_operands():
    rng = PRNG(95205)
    for _ in range(50):
        a, b = rng.rand(), rng.rand()
        hi = mul_hi64(a, b)
        assert hi <= a and hi <= b


def test_mul_hi64_power_of_two():
    assert mul_hi64(1 << 32, 1 << 32) == 1
    assert mul_hi64(MASK64, MASK64) == MASK64 - 1


def test_split_basic():
    assert split("a b c", " ") == ["a", "b", "c"]


def test_split_empty_string_gives_empty_list():
    assert split("", ",") == []


def test_split_keeps_empty_fields():
    assert split("a,,b,", ",") == ["a", "", "b", ""]


def test_split_multichar_delimiter():
    assert split("x::y::z", "::") == ["x", "y", "z"]


def test_split_without_delimiter_present():
    assert split("abc", ";") == ["abc"]


def test_split_empty_delimiter_rejected():
    with pytest.raises(ValueError):
        split("abc", "")


def test_move_to_front_moves_first_match():
    items = [1, 2, 3, 4, 3]
    move_to_front(items, lambda x: x == 3)
    assert items == [3, 1, 2, 4, 3]


def test_move_to_front_no_match_unchanged():
    items = ["a", "b", "c"]
    move_to_front(items, lambda x: x == "z")
    assert items == ["a", "b", "c"]


def test_move_to_front_already_first():
    items = ["a", "b", "c"]
    move_to_front(items, lambda x: x == "a")
    assert items == ["a", "b", "c"]


def test_move_to_front_preserves_elements():
    items = list(range(10))
    move_to_front(items, lambda x: x > 6)
    assert items[0] == 7
    assert sorted(items) == list(range(10))


def test_now_is_monotonic():
    first = now()
    second = now()
    assert second >= first
    assert first >= 0