"""Tests for the identifier-seeded LCG."""

from __future__ import annotations

import pytest

from tess_hub.compute.random_stream import SeededRandomStream, seed_from_identifier


class TestSeedFromIdentifier:
    def test_sums_code_points(self) -> None:
        assert seed_from_identifier("429375484") == 478

    def test_empty_identifier(self) -> None:
        assert seed_from_identifier("") == 0

    def test_anagrams_share_a_seed(self) -> None:
        assert seed_from_identifier("123") == seed_from_identifier("321")


class TestSeededRandomStream:
    def test_first_value_for_proxima(self) -> None:
        stream = SeededRandomStream.for_identifier("429375484")
        assert stream.next() == pytest.approx(62855 / 233280)
        assert stream.state == 62855

    def test_same_seed_same_sequence(self) -> None:
        a = SeededRandomStream(12345)
        b = SeededRandomStream(12345)
        assert [a.next() for _ in range(50)] == [b.next() for _ in range(50)]

    def test_different_seeds_diverge(self) -> None:
        a = SeededRandomStream(1)
        b = SeededRandomStream(2)
        assert [a.next() for _ in range(5)] != [b.next() for _ in range(5)]

    def test_values_in_unit_interval(self) -> None:
        stream = SeededRandomStream(0)
        values = [stream.next() for _ in range(2000)]
        assert min(values) >= 0.0
        assert max(values) < 1.0

    def test_next_range_bounds(self) -> None:
        stream = SeededRandomStream(99)
        values = [stream.next_range(3.0, 10.0) for _ in range(500)]
        assert all(3.0 <= v < 10.0 for v in values)

    def test_next_centered_bounds(self) -> None:
        stream = SeededRandomStream(7)
        values = [stream.next_centered(0.002) for _ in range(500)]
        assert all(-0.001 <= v < 0.001 for v in values)

    def test_large_seed_is_reduced(self) -> None:
        assert SeededRandomStream(233280 + 5).state == 5
