"""Tests for flattened token streams."""

import random

import pytest

from variation.generation.random_code import random_code
from variation.program import (
    CLOSE,
    OPEN,
    flatten,
    is_well_formed,
    programs_equal,
    reconstruct,
    remove_empties,
)


class TestFlatten:
    """Tests for program -> token stream."""

    def test_nested_program(self):
        assert flatten((1, 2, ("a", "b"))) == [OPEN, 1, 2, OPEN, "a", "b", CLOSE, CLOSE]

    def test_empty_group_becomes_bracket_pair(self):
        assert flatten(("a", ())) == [OPEN, "a", OPEN, CLOSE, CLOSE]

    def test_atom(self):
        assert flatten("a") == ["a"]


class TestWellFormed:
    """Tests for bracket validity."""

    @pytest.mark.parametrize(
        "tokens, expected",
        [
            ([], True),
            ([OPEN, 1, CLOSE], True),
            ([OPEN, OPEN, CLOSE, CLOSE, OPEN, CLOSE], True),
            ([CLOSE, OPEN], False),
            ([OPEN, 1, CLOSE, OPEN, 2], False),
            ([OPEN, CLOSE, CLOSE], False),
        ],
    )
    def test_bracket_sequences(self, tokens, expected):
        assert is_well_formed(tokens) is expected


class TestReconstruct:
    """Tests for token stream -> program."""

    def test_single_group_is_unwrapped(self):
        assert reconstruct([OPEN, 1, OPEN, "a", CLOSE, CLOSE]) == (1, ("a",))

    def test_several_top_level_groups_are_wrapped(self):
        assert reconstruct([OPEN, 1, CLOSE, OPEN, 2, CLOSE]) == ((1,), (2,))

    def test_inner_singleton_groups_are_kept(self):
        assert reconstruct([OPEN, "a", OPEN, "b", CLOSE, CLOSE]) == ("a", ("b",))

    def test_empty_group_token(self):
        assert reconstruct([OPEN, "a", (), CLOSE]) == ("a", ())

    def test_single_atom(self):
        assert reconstruct(["a"]) == "a"

    def test_empty_stream(self):
        assert reconstruct([]) == ()

    def test_malformed_stream_raises(self):
        with pytest.raises(ValueError):
            reconstruct([CLOSE, OPEN])

    @pytest.mark.parametrize("seed", range(40))
    def test_reconstruct_inverts_flatten(self, seed: int) -> None:
        rng = random.Random(seed)
        program = remove_empties(random_code(50, ["a", "b", 1, 2.5], rng))
        tokens = flatten(program)
        assert is_well_formed(tokens)
        assert programs_equal(reconstruct(tokens), program)


class TestRemoveEmpties:
    """Tests for empty sub-list cleanup."""

    def test_removes_nested_empties(self):
        assert remove_empties(("a", (), ("b", ()), ((),))) == ("a", ("b",))

    def test_root_is_kept(self):
        assert remove_empties(((),)) == ()

    def test_atom_untouched(self):
        assert remove_empties("a") == "a"
