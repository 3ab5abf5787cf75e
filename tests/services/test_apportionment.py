import math
from fractions import Fraction

import pytest

from prize_tiers.services.apportionment import largest_remainder


class TestLargestRemainder:
    def test_equal_weights_split_evenly(self) -> None:
        assert largest_remainder(9, [1, 1, 1]) == [3, 3, 3]

    def test_leftover_units_go_to_largest_remainders(self) -> None:
        # ideals 1.67, 3.33, 5.0 → floors 1, 3, 5; the spare unit goes to index 0
        assert largest_remainder(10, [1, 2, 3]) == [2, 3, 5]

    def test_ties_broken_by_lower_index(self) -> None:
        """Equal remainders favour the earlier entry."""
        assert largest_remainder(7, [1, 1, 1]) == [3, 2, 2]
        assert largest_remainder(2, [1, 1, 1, 1]) == [1, 1, 0, 0]

    def test_zero_weight_entries_get_nothing(self) -> None:
        assert largest_remainder(5, [1, 0, 0]) == [5, 0, 0]

    def test_zero_total(self) -> None:
        assert largest_remainder(0, [1, 2, 3]) == [0, 0, 0]

    def test_zero_total_with_zero_weights(self) -> None:
        assert largest_remainder(0, [0, 0]) == [0, 0]

    def test_empty_weights(self) -> None:
        assert largest_remainder(0, []) == []

    def test_float_weights(self) -> None:
        assert largest_remainder(10, [0.1, 0.2, 0.7]) == [1, 2, 7]

    def test_fraction_weights(self) -> None:
        assert largest_remainder(6, [Fraction(1, 3), Fraction(2, 3)]) == [2, 4]

    def test_sums_exactly_to_total(self) -> None:
        weight_sets = [[1, 1, 1], [1, 2, 3, 4, 5], [1, 2, 4, 8, 16], [5, 4, 3, 2, 1], [1.5, 0.25, 3.0]]
        for weights in weight_sets:
            weight_sum = sum(weights)
            for total in range(60):
                result = largest_remainder(total, weights)
                assert sum(result) == total
                for alloc, w in zip(result, weights, strict=True):
                    ideal = total * w / weight_sum
                    assert math.floor(ideal) - 1e-9 <= alloc <= math.ceil(ideal) + 1e-9

    def test_deterministic(self) -> None:
        weights = [3, 1, 4, 1, 5]
        assert largest_remainder(23, weights) == largest_remainder(23, weights)


class TestLargestRemainderErrors:
    def test_negative_total(self) -> None:
        with pytest.raises(ValueError, match="negative total"):
            largest_remainder(-1, [1, 1])

    def test_negative_weight(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            largest_remainder(3, [1, -1])

    def test_zero_weight_sum(self) -> None:
        with pytest.raises(ValueError, match="zero total weight"):
            largest_remainder(3, [0, 0])

    def test_non_finite_weight(self) -> None:
        with pytest.raises(ValueError, match="finite"):
            largest_remainder(3, [1.0, math.inf])
