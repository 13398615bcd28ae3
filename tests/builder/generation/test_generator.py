"""
Unit tests for problem generation.
"""

import pytest

from worksheet_toolkit.builder.generation import (
    SequenceRandomSource,
    SystemRandomSource,
    generate_problems,
)
from worksheet_toolkit.core.errors import ConfigurationError, RandomSourceExhausted
from worksheet_toolkit.core.models import Operator, OperandRange

SAMPLES = [3, 7, 2, 9, 1, 4, 5, 6, 8, 2]
DIGITS = OperandRange(1, 9)


def _pairs(problems):
    return [(p.first_operand, p.second_operand) for p in problems]


class TestGenerateProblemsWithFixedSamples:
    """Operand rules per operator, with pinned samples."""

    def test_generate_when_add_then_samples_used_in_order(self):
        problems = generate_problems(Operator.ADD, 5, DIGITS, SequenceRandomSource(SAMPLES))

        assert _pairs(problems) == [(3, 7), (2, 9), (1, 4), (5, 6), (8, 2)]
        assert all(p.operator is Operator.ADD for p in problems)

    def test_generate_when_subtract_then_larger_operand_first(self):
        problems = generate_problems("subtract", 5, DIGITS, SequenceRandomSource(SAMPLES))

        assert _pairs(problems) == [(7, 3), (9, 2), (4, 1), (6, 5), (8, 2)]

    def test_generate_when_divide_then_first_is_quotient_times_divisor(self):
        problems = generate_problems("÷", 5, DIGITS, SequenceRandomSource(SAMPLES))

        assert _pairs(problems) == [(21, 7), (18, 9), (4, 4), (30, 6), (16, 2)]
        assert [p.answer for p in problems] == [3, 2, 1, 5, 8]

    def test_generate_when_divide_and_range_includes_zero_then_divisor_clamped_to_one(self):
        problems = generate_problems(
            Operator.DIVIDE, 1, OperandRange(0, 5), SequenceRandomSource([4, 0])
        )

        assert _pairs(problems) == [(4, 1)]

    def test_generate_when_multiply_then_samples_unchanged(self):
        problems = generate_problems("×", 2, DIGITS, SequenceRandomSource([4, 6, 9, 9]))

        assert _pairs(problems) == [(4, 6), (9, 9)]
        assert problems[1].answer == 81

    def test_generate_when_samples_run_out_then_raises_exhausted(self):
        rng = SequenceRandomSource([1, 2, 3])

        with pytest.raises(RandomSourceExhausted):
            generate_problems(Operator.ADD, 2, DIGITS, rng)


class TestGenerateProblemsInvariants:
    """Properties that hold for any random draw."""

    @pytest.mark.parametrize("operator", list(Operator))
    def test_generate_when_seeded_then_every_problem_is_valid(self, operator):
        problems = generate_problems(operator, 200, DIGITS, SystemRandomSource(seed=7))

        assert len(problems) == 200
        for p in problems:
            if operator is Operator.SUBTRACT:
                assert p.first_operand >= p.second_operand
                assert DIGITS.contains(p.first_operand)
            elif operator is Operator.DIVIDE:
                assert p.second_operand >= 1
                assert p.first_operand % p.second_operand == 0
                assert DIGITS.contains(p.answer)
            else:
                assert DIGITS.contains(p.first_operand)
                assert DIGITS.contains(p.second_operand)

    def test_generate_when_same_seed_then_same_output(self):
        first = generate_problems("add", 10, DIGITS, SystemRandomSource(seed=99))
        second = generate_problems("add", 10, DIGITS, SystemRandomSource(seed=99))

        assert first == second

    def test_generate_when_single_value_range_then_all_equal(self):
        problems = generate_problems("add", 3, OperandRange(5, 5), SystemRandomSource(seed=1))

        assert _pairs(problems) == [(5, 5)] * 3

    def test_generate_when_no_rng_then_uses_system_source(self):
        problems = generate_problems("add", 4, DIGITS)

        assert len(problems) == 4


class TestGenerateProblemsValidation:
    """Configuration errors raised before any sampling."""

    def test_generate_when_count_zero_then_empty_and_no_samples_drawn(self):
        rng = SequenceRandomSource([1, 2])

        assert generate_problems("add", 0, DIGITS, rng) == []
        assert rng.remaining == 2

    def test_generate_when_count_negative_then_raises(self):
        with pytest.raises(ConfigurationError, match="non-negative"):
            generate_problems("add", -1, DIGITS)

    @pytest.mark.parametrize("count", [2.5, "3", True])
    def test_generate_when_count_not_integer_then_raises(self, count):
        with pytest.raises(ConfigurationError, match="integer"):
            generate_problems("add", count, DIGITS)

    def test_generate_when_range_inverted_then_raises(self):
        class LooseRange:
            min = 9
            max = 1

        with pytest.raises(ConfigurationError, match="min"):
            generate_problems("add", 1, LooseRange())

    def test_generate_when_operator_unknown_then_raises(self):
        with pytest.raises(ConfigurationError, match="operator"):
            generate_problems("power", 1, DIGITS)
