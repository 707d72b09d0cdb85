"""Tests for gridcalc.calc input normalization and formula parsing."""

from __future__ import annotations

import sys

import pytest

from gridcalc.calc._parser import (
    is_formula,
    is_number,
    normalize_input,
    parse_literal,
    parse_references,
    split_operands,
)


class TestNormalizeInput:
    def test_strips_all_whitespace(self) -> None:
        assert normalize_input("  = A1 +\tA2\n") == "=A1+A2"

    def test_text_loses_inner_spaces(self) -> None:
        assert normalize_input("hello world") == "helloworld"

    def test_empty(self) -> None:
        assert normalize_input("   ") == ""


class TestLiterals:
    def test_integer(self) -> None:
        assert parse_literal("5") == 5
        assert isinstance(parse_literal("5"), int)

    def test_signed_integer(self) -> None:
        assert parse_literal("-12") == -12
        assert parse_literal("+3") == 3

    def test_decimal(self) -> None:
        assert parse_literal("2.5") == 2.5
        assert isinstance(parse_literal("2.5"), float)

    def test_text_unchanged(self) -> None:
        assert parse_literal("hello") == "hello"
        assert parse_literal("12abc") == "12abc"

    @pytest.mark.parametrize("text", ["nan", "inf", "1_000", "0x10"])
    def test_python_only_numbers_stay_text(self, text: str) -> None:
        assert parse_literal(text) == text

    def test_blank(self) -> None:
        assert parse_literal("") == ""

    @pytest.mark.skipif(
        not hasattr(sys, "get_int_max_str_digits"), reason="no int digit limit",
    )
    def test_huge_integer_stays_text(self) -> None:
        text = "1" * 5000
        assert parse_literal(text) == text

    @pytest.mark.parametrize("text", ["٣", "١٢", "١.5", "５"])
    def test_non_ascii_digits_stay_text(self, text: str) -> None:
        assert not is_number(text)
        assert parse_literal(text) == text

    def test_is_number(self) -> None:
        assert is_number("42")
        assert is_number("1e3")
        assert not is_number("=42")


class TestIsFormula:
    def test_formula(self) -> None:
        assert is_formula("=A1+A2")

    def test_equals_only(self) -> None:
        assert is_formula("=")

    def test_not_formula(self) -> None:
        assert not is_formula("A1+A2")
        assert not is_formula("5")
        assert not is_formula("")


class TestSplitOperands:
    def test_two_operands(self) -> None:
        assert split_operands("=A1+B2") == ["A1", "B2"]

    def test_case_normalized(self) -> None:
        assert split_operands("=a1+b2") == ["A1", "B2"]

    def test_three_operands(self) -> None:
        assert split_operands("=A1+B1+C1") == ["A1", "B1", "C1"]

    def test_single_operand(self) -> None:
        assert split_operands("=A1") == ["A1"]

    def test_empty_operand(self) -> None:
        assert split_operands("=A1+") == ["A1", ""]


class TestParseReferences:
    def test_simple(self) -> None:
        assert parse_references("=A1+B2") == ["A1", "B2"]

    def test_no_duplicates(self) -> None:
        assert parse_references("=A1+A1") == ["A1"]

    def test_exact_ids_only(self) -> None:
        """A10 is not a reference to A1."""
        assert parse_references("=A10+B1") == ["A10", "B1"]

    def test_junk_tokens_skipped(self) -> None:
        assert parse_references("=A1+hello") == ["A1"]

    def test_not_a_formula(self) -> None:
        assert parse_references("A1+A2") == []
