# tests/test_statistics.py
import pytest
from dataset_analyzer.core.csv_parser import parse_csv
from dataset_analyzer.core.statistics import (
    StatisticsSummary,
    calculate_statistics,
    describe,
    get_column_statistics,
    percentile,
)

class TestNumericStatistics:

    def test_basic_summary(self):
        """[1, 2, 3, 4] gives the textbook population summary"""
        stats = calculate_statistics([1, 2, 3, 4])

        assert stats.count == 4
        assert stats.mean == 2.5
        assert stats.std == 1.12
        assert stats.min == 1
        assert stats.max == 4
        assert stats.q25 == 2
        assert stats.q50 == 3
        assert stats.q75 == 4
        assert stats.is_numeric

    def test_input_order_does_not_matter(self):
        assert calculate_statistics([4, 1, 3, 2]) == calculate_statistics([1, 2, 3, 4])

    def test_population_standard_deviation(self):
        """Divides by N rather than N - 1"""
        stats = calculate_statistics([1, 2])

        assert stats.mean == 1.5
        assert stats.std == 0.5

    def test_mean_and_std_are_rounded(self):
        stats = calculate_statistics([1, 1, 2])

        assert stats.mean == 1.33
        assert stats.std == 0.47

    def test_half_values_round_up(self):
        assert calculate_statistics([0.125]).mean == 0.13

    def test_quartiles_are_unrounded_elements(self):
        stats = calculate_statistics([7.25, 71.2833, 7.925, 53.1, 8.05])

        assert stats.min == 7.25
        assert stats.q25 == 7.925
        assert stats.q50 == 8.05
        assert stats.q75 == 53.1
        assert stats.max == 71.2833

    def test_nulls_are_skipped(self):
        stats = calculate_statistics([None, 10, '', 20, None, 40])

        assert stats.count == 3
        assert stats.mean == 23.33
        assert stats.std == 12.47
        assert stats.q25 == 10
        assert stats.q50 == 20
        assert stats.q75 == 40

    def test_numeric_strings(self):
        stats = calculate_statistics(['3', '1', '2'])

        assert stats.count == 3
        assert stats.min == 1
        assert stats.max == 3

    @pytest.mark.parametrize("p,expected", [(0.25, 20), (0.5, 30), (0.75, 40)])
    def test_nearest_rank_percentile(self, p, expected):
        assert percentile([10, 20, 30, 40], p) == expected

class TestCategoricalStatistics:

    def test_mode_and_frequency(self):
        stats = calculate_statistics(['S', 'C', 'S', 'Q', 'S'])

        assert stats.count == 5
        assert stats.unique == 3
        assert stats.top == 'S'
        assert stats.freq == 3
        assert stats.mean is None
        assert not stats.is_numeric

    def test_ties_go_to_first_seen_value(self):
        """'b' reaches the top frequency first in a left to right scan"""
        stats = calculate_statistics(['b', 'a', 'b', 'a', 'c'])

        assert stats.top == 'b'
        assert stats.freq == 2

    def test_mixed_values_use_categorical_shape(self):
        stats = calculate_statistics([113803, 'PC 17599', 113803])

        assert stats.top == '113803'
        assert stats.freq == 2
        assert stats.unique == 2
        assert stats.q50 is None

class TestDegenerateStatistics:

    def test_all_null_column(self):
        stats = calculate_statistics([None, '', None])

        assert stats == StatisticsSummary(count=0)
        assert stats.to_dict() == {'count': 0}

    def test_unknown_column(self):
        dataset = parse_csv("a\n1\n2")

        assert get_column_statistics(dataset, 'missing') == StatisticsSummary(count=0)

    def test_describe_covers_every_column(self):
        dataset = parse_csv("a,b\n1,x\n2,y\n3,x")
        summaries = describe(dataset)

        assert list(summaries) == ['a', 'b']
        assert summaries['a'].mean == 2
        assert summaries['b'].top == 'x'

    def test_to_dict_drops_absent_fields(self):
        data = calculate_statistics([1, 2, 3, 4]).to_dict()

        assert set(data) == {'count', 'mean', 'std', 'min', 'q25', 'q50', 'q75', 'max'}
