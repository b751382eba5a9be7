"""Tests for reading and writing Push program text."""

import math
import random

import pytest

from variation.exceptions import ProgramSyntaxError
from variation.generation.random_code import random_code
from variation.program import OPEN, parse_program, program_to_text, programs_equal


class TestProgramToText:
    """Tests for rendering programs."""

    def test_nested_program(self):
        assert program_to_text(("a", "b", ("c", "d"))) == "(a b (c d))"

    def test_literals(self):
        assert program_to_text((1, -2.5, True, False)) == "(1 -2.5 true false)"

    def test_empty_group(self):
        assert program_to_text(("a", (), "b")) == "(a () b)"

    def test_bare_atom(self):
        assert program_to_text("exec_dup") == "exec_dup"

    def test_symbol_with_space_is_rejected(self):
        with pytest.raises(ProgramSyntaxError, match="cannot be written"):
            program_to_text(("bad symbol",))

    def test_marker_is_rejected(self):
        with pytest.raises(ProgramSyntaxError, match="marker"):
            program_to_text((OPEN,))


class TestParseProgram:
    """Tests for reading programs."""

    def test_nested_program(self):
        assert parse_program("(a b (c d))") == ("a", "b", ("c", "d"))

    def test_literal_types(self):
        program = parse_program("(1 -2.5 1e-05 true false integer_add)")
        assert programs_equal(program, (1, -2.5, 1e-05, True, False, "integer_add"))

    def test_special_floats(self):
        program = parse_program("(inf -inf nan)")
        assert program[0] == math.inf
        assert program[1] == -math.inf
        assert math.isnan(program[2])

    def test_extra_whitespace(self):
        assert parse_program("  ( a   ( b )  ) ") == ("a", ("b",))

    def test_only_first_form_is_read(self):
        assert parse_program("(a) (b)") == ("a",)

    def test_literal_looking_symbols_read_back_as_literals(self):
        text = program_to_text(("true", "5", "nan", "x"))
        assert text == "(true 5 nan x)"
        program = parse_program(text)
        assert program[0] is True
        assert programs_equal(program[1], 5)
        assert math.isnan(program[2])
        assert program[3] == "x"
        assert not programs_equal(program, ("true", "5", "nan", "x"))

    def test_bare_atom(self):
        assert parse_program("42") == 42

    def test_empty_text(self):
        with pytest.raises(ProgramSyntaxError, match="empty"):
            parse_program("   ")

    def test_unbalanced_open(self):
        with pytest.raises(ProgramSyntaxError, match="Unbalanced"):
            parse_program("(a (b c)")

    def test_leading_close(self):
        with pytest.raises(ProgramSyntaxError, match="Unmatched"):
            parse_program(") a")

    @pytest.mark.parametrize("seed", range(25))
    def test_text_round_trip(self, seed: int) -> None:
        rng = random.Random(seed)
        vocabulary = ["integer_add", "exec_if", 3, True, lambda r: r.uniform(-5.0, 5.0)]
        program = random_code(40, vocabulary, rng)
        assert programs_equal(parse_program(program_to_text(program)), program)
