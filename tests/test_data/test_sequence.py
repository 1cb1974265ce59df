"""Tests for plain-text sequences and summaries."""

from __future__ import annotations

import math

import numpy as np
import pytest

from hilbertplot.data.sequence import format_sequence, parse_sequence, shannon_entropy, summarize


class TestParse:
    def test_mixed_separators(self):
        assert parse_sequence("1 2,3;4\n5\t-6.5e1").tolist() == [1, 2, 3, 4, 5, -65.0]

    def test_blank(self):
        assert parse_sequence("").size == 0
        assert parse_sequence("  \n ,; ").size == 0

    def test_bad_token(self):
        with pytest.raises(ValueError, match="'abc' at position 2"):
            parse_sequence("1 2 abc 4")

    def test_format_parses_back(self):
        values = [0.1, -2.0, 3e-9]
        assert parse_sequence(format_sequence(values)).tolist() == values
        assert format_sequence([1.0, 2.0], sep=",") == "1.0,2.0"


class TestSummary:
    def test_basic(self):
        s = summarize([1.0, 1.0, 2.0, 2.0])
        assert (s.length, s.minimum, s.maximum, s.mean) == (4, 1.0, 2.0, 1.5)
        assert s.std == pytest.approx(0.5)
        assert s.entropy == pytest.approx(1.0)

    def test_empty(self):
        s = summarize([])
        assert s.length == 0 and s.entropy == 0.0
        assert s.to_dict()["mean"] == 0.0

    def test_entropy_of_distinct_values(self):
        assert shannon_entropy(np.arange(8.0)) == pytest.approx(3.0)
        assert shannon_entropy(np.ones(5)) == 0.0
        assert shannon_entropy(np.array([1.0, 2.0, 2.0])) == pytest.approx(
            -(1 / 3) * math.log2(1 / 3) - (2 / 3) * math.log2(2 / 3)
        )
