# tests/test_csv_parser.py
import pytest
from dataset_analyzer.core.csv_parser import (
    Dataset,
    convert_field,
    format_value,
    parse_csv,
    parse_number,
    round_half_up,
    to_fixed,
)

class TestFieldConversion:

    @pytest.mark.parametrize("raw", ["", "NA", "NaN"])
    def test_null_tokens(self, raw):
        """Empty fields and NA markers become None"""
        assert convert_field(raw) is None

    def test_integral_numbers_become_int(self):
        """Whole numbers are stored as int"""
        assert convert_field("3") == 3
        assert isinstance(convert_field("3"), int)
        assert convert_field("1e3") == 1000
        assert convert_field("-4.0") == -4

    def test_decimal_numbers(self):
        assert convert_field("7.25") == 7.25
        assert convert_field(".5") == 0.5

    def test_text_is_kept(self):
        """Anything that does not parse fully as a number stays text"""
        assert convert_field("male") == "male"
        assert convert_field("12abc") == "12abc"
        assert convert_field("A/5 21171") == "A/5 21171"

    def test_non_finite_and_underscored_values_are_text(self):
        assert convert_field("inf") == "inf"
        assert convert_field("Infinity") == "Infinity"
        assert convert_field("1_000") == "1_000"

    def test_long_integers_keep_exact_value(self):
        """Integer text is not routed through float"""
        assert convert_field("12345678901234567890") == 12345678901234567890
        assert convert_field("-9007199254740993") == -9007199254740993
        assert format_value(convert_field("12345678901234567890")) == "12345678901234567890"

    def test_parse_number_rejects_booleans_and_nan(self):
        assert parse_number(True) is None
        assert parse_number(float('nan')) is None
        assert parse_number(" 12 ") == 12
        assert parse_number(None) is None

class TestFormatting:

    def test_format_value(self):
        assert format_value(1) == "1"
        assert format_value(3.0) == "3"
        assert format_value(7.25) == "7.25"
        assert format_value("yes") == "yes"
        assert format_value(None) == "null"

    def test_to_fixed_rounds_half_up(self):
        """Exact halves round away from zero"""
        assert to_fixed(0.125, 2) == "0.13"
        assert to_fixed(2.5, 0) == "3"
        assert to_fixed(8.333333, 2) == "8.33"
        assert to_fixed(25, 1) == "25.0"

    def test_round_half_up(self):
        assert round_half_up(1.118033988749895) == 1.12
        assert round_half_up(0.125) == 0.13

class TestParseCSV:

    def test_null_handling(self):
        """NA and empty fields are parsed as None"""
        dataset = parse_csv("a,b\n1,NA\n,2")

        assert dataset.shape == (2, 2)
        assert dataset.records() == [
            {'a': 1, 'b': None},
            {'a': None, 'b': 2},
        ]

    def test_headers_and_fields_are_trimmed(self):
        dataset = parse_csv("  name , age \n Alice , 30 \n")

        assert dataset.columns == ['name', 'age']
        assert dataset.records() == [{'name': 'Alice', 'age': 30}]

    def test_missing_trailing_fields_become_none(self):
        """Short lines produce rows with None in the missing columns"""
        dataset = parse_csv("a,b,c\n1\n1,2,3")

        assert dataset.records()[0] == {'a': 1, 'b': None, 'c': None}
        assert dataset.records()[1] == {'a': 1, 'b': 2, 'c': 3}

    def test_extra_fields_are_ignored(self):
        dataset = parse_csv("a,b\n1,2,3,4")

        assert dataset.shape == (1, 2)
        assert dataset.records() == [{'a': 1, 'b': 2}]

    def test_all_records_share_the_same_keys(self):
        dataset = parse_csv("x,y,z\n1,2\n\n4,5,6,7\nfoo")
        keys = [list(record.keys()) for record in dataset.records()]

        assert all(k == ['x', 'y', 'z'] for k in keys)
        assert dataset.shape == (4, 3)

    def test_duplicate_headers_keep_last_value(self):
        """Repeated column names collapse into one column"""
        dataset = parse_csv("a,a,b\n1,2,3")

        assert dataset.columns == ['a', 'b']
        assert dataset.records() == [{'a': 2, 'b': 3}]

    def test_windows_line_endings(self):
        dataset = parse_csv("a,b\r\n1,x\r\n2,y\r\n")

        assert dataset.shape == (2, 2)
        assert dataset.column_values('b') == ['x', 'y']

    def test_only_newlines_split_records(self):
        """Other line-break characters stay inside their field"""
        dataset = parse_csv("name,n\nwait\x85more,1\nform\x0cfeed,2\nsep line,3")

        assert dataset.shape == (3, 2)
        assert dataset.column_values('name') == ['wait\x85more', 'form\x0cfeed', 'sep line']
        assert dataset.column_values('n') == [1, 2, 3]

    def test_mixed_column_keeps_per_field_kinds(self):
        dataset = parse_csv("ticket\n113803\nPC 17599")

        assert dataset.column_values('ticket') == [113803, 'PC 17599']

    def test_empty_text(self):
        dataset = parse_csv("")

        assert dataset.shape == (0, 0)
        assert dataset.records() == []
        assert dataset.is_empty()

    def test_header_only_has_no_columns(self):
        """Column count is zero when there are no rows"""
        dataset = parse_csv("a,b,c\n")

        assert dataset.shape == (0, 0)
        assert dataset.columns == []

class TestDataset:

    @pytest.fixture
    def dataset(self):
        lines = ["id,value"] + [f"{i},{i * 10}" for i in range(1, 16)]
        return parse_csv("\n".join(lines))

    def test_shape_matches_records(self, dataset):
        records = dataset.records()
        rows, columns = dataset.shape

        assert rows == len(records)
        assert columns == len(records[0])

    def test_head_and_tail(self, dataset):
        head = dataset.head(10)
        tail = dataset.tail(10)

        assert len(head) == 10
        assert head[0] == {'id': 1, 'value': 10}
        assert len(tail) == 10
        assert tail[-1] == {'id': 15, 'value': 150}
        assert tail[0]['id'] == 6

    def test_tail_of_zero_rows(self, dataset):
        assert dataset.tail(0) == []

    def test_unknown_column_reads_as_nulls(self, dataset):
        assert dataset.column_values('missing') == [None] * 15

    def test_records_are_copies(self, dataset):
        """Mutating returned records does not change the dataset"""
        records = dataset.records()
        records[0]['id'] = 'changed'

        assert dataset.records()[0]['id'] == 1

    def test_values_keep_python_types(self):
        dataset = Dataset.from_records([{'a': 1, 'b': None}, {'a': 2.5, 'b': 'x'}])

        assert dataset.column_values('a') == [1, 2.5]
        assert dataset.column_values('b') == [None, 'x']
        assert isinstance(dataset.column_values('a')[0], int)

    def test_dataset_is_frozen(self, dataset):
        with pytest.raises(AttributeError):
            dataset.frame = None
