"""Tests for the password generator."""

import pytest

from core import password_utils as pu
from core.password_utils import (
    AMBIGUOUS,
    ConfigError,
    GenerationConfig,
    build_character_classes,
    generate_many,
    generate_password,
    rand_int,
    remove_ambiguous,
)


class RecordingRand:
    def __init__(self, pick=lambda n: 0):
        self.pick = pick
        self.calls = []

    def __call__(self, n):
        self.calls.append(n)
        return self.pick(n)


CATEGORY_FLAGS = ["include_upper", "include_lower", "include_digits", "include_symbols"]


def _config(enabled, length=16, exclude_ambiguous=True):
    flags = {f: (f in enabled) for f in CATEGORY_FLAGS}
    return GenerationConfig(length=length, exclude_ambiguous=exclude_ambiguous, **flags)


@pytest.mark.parametrize("length", [4, 5, 16, 64])
def test_generate_password_has_requested_length(length):
    assert len(generate_password(GenerationConfig(length=length))) == length


@pytest.mark.parametrize(
    "enabled",
    [
        CATEGORY_FLAGS,
        ["include_digits", "include_symbols"],
        ["include_upper"],
        ["include_lower", "include_digits"],
    ],
)
@pytest.mark.parametrize("exclude_ambiguous", [True, False])
def test_generate_password_covers_every_enabled_category(enabled, exclude_ambiguous):
    cfg = _config(enabled, length=4, exclude_ambiguous=exclude_ambiguous)
    classes = build_character_classes(cfg)
    alphabet = "".join(classes)
    for _ in range(50):
        pwd = generate_password(cfg)
        for cls in classes:
            assert any(c in cls for c in pwd)
        assert all(c in alphabet for c in pwd)


def test_exclude_ambiguous_never_emits_ambiguous_chars():
    cfg = GenerationConfig(length=64, exclude_ambiguous=True)
    for _ in range(50):
        assert not set(generate_password(cfg)) & AMBIGUOUS


def test_remove_ambiguous_filters_each_class():
    assert remove_ambiguous(pu.DIGITS) == "23456789"
    assert "O" not in remove_ambiguous(pu.UPPER)
    assert "I" not in remove_ambiguous(pu.UPPER)
    assert remove_ambiguous(pu.LOWER) == pu.LOWER.replace("l", "")
    assert remove_ambiguous(pu.SYMBOLS) == pu.SYMBOLS


def test_character_classes_keep_category_order():
    cfg = GenerationConfig(exclude_ambiguous=False)
    assert build_character_classes(cfg) == [pu.UPPER, pu.LOWER, pu.DIGITS, pu.SYMBOLS]
    cfg = _config(["include_symbols", "include_upper"], exclude_ambiguous=False)
    assert build_character_classes(cfg) == [pu.UPPER, pu.SYMBOLS]


@pytest.mark.parametrize("length", [0, 1, 3])
def test_length_below_minimum_is_rejected(length):
    with pytest.raises(ConfigError, match="length below minimum of 4"):
        generate_password(GenerationConfig(length=length))


def test_length_four_with_all_categories_succeeds():
    pwd = generate_password(GenerationConfig(length=4))
    assert len(pwd) == 4


@pytest.mark.parametrize("length", [4, 16, 100])
def test_no_category_enabled_is_rejected(length):
    with pytest.raises(ConfigError, match="at least one character category"):
        generate_password(_config([], length=length))


def test_length_two_with_four_categories_is_rejected():
    # the minimum-length check fires first
    with pytest.raises(ConfigError):
        generate_password(GenerationConfig(length=2))


def test_validate_rejects_length_smaller_than_category_count():
    cfg = GenerationConfig(length=4)
    with pytest.raises(ConfigError, match="length too small"):
        pu.validate(cfg, ["A", "b", "1", "!", "?"])


def test_config_error_is_a_value_error():
    assert issubclass(ConfigError, ValueError)


def test_random_draw_order_and_bounds():
    rand = RecordingRand()
    generate_password(GenerationConfig(length=5, exclude_ambiguous=False), rand)
    # one per class, one fill draw from the 86-char alphabet, then the shuffle
    assert rand.calls == [26, 26, 10, 24, 86, 5, 4, 3, 2]


def test_seed_order_without_shuffle_moves():
    # j == i leaves every position in place
    rand = RecordingRand(lambda n: n - 1)
    pwd = generate_password(GenerationConfig(length=6, exclude_ambiguous=False), rand)
    assert pwd == "Zz9///"


def test_shuffle_swaps_with_earlier_positions():
    rand = RecordingRand(lambda n: 0)
    pwd = generate_password(GenerationConfig(length=6, exclude_ambiguous=False), rand)
    assert pwd == "a0!AAA"


def test_shuffle_is_fisher_yates():
    items = list("abcd")
    pu.shuffle(items, lambda n: 0)
    assert items == list("bcda")


def test_rand_int_reduces_modulo(monkeypatch):
    monkeypatch.setattr(pu.secrets, "randbits", lambda bits: 2**32 - 1)
    assert rand_int(10) == 5
    assert rand_int(1) == 0


def test_rand_int_stays_in_range():
    for n in (1, 2, 7, 86):
        for _ in range(100):
            assert 0 <= rand_int(n) < n


def test_rand_int_rejects_non_positive_bound():
    with pytest.raises(ValueError):
        rand_int(0)


def test_generate_password_calls_are_independent():
    cfg = GenerationConfig(length=32)
    assert len({generate_password(cfg) for _ in range(20)}) == 20


def test_generate_many():
    passwords = generate_many(GenerationConfig(length=12), 5)
    assert len(passwords) == 5
    assert all(len(p) == 12 for p in passwords)
    with pytest.raises(ConfigError):
        generate_many(GenerationConfig(length=12), 0)
