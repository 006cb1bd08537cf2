# tests/test_inference.py
import pytest
from dataset_analyzer.core.csv_parser import parse_csv
from dataset_analyzer.core.inference import (
    ColumnProfile,
    FeatureType,
    StorageKind,
    get_column_profile,
    get_column_profiles,
    infer_column_type,
    is_fully_numeric,
    profile_values,
)

class TestInferColumnType:

    def test_two_numeric_values_are_binary(self):
        """The binary rule is checked before the numeric rule"""
        assert infer_column_type([0, 1, 1, 0, 1]) == FeatureType.BINARY

    def test_two_text_values_are_binary(self):
        assert infer_column_type(['male', 'female', 'male']) == FeatureType.BINARY

    def test_numeric_column(self):
        assert infer_column_type([1, 2, 3, 4.5]) == FeatureType.NUMERICAL

    def test_single_number_is_numerical(self):
        assert infer_column_type([5, 5, 5]) == FeatureType.NUMERICAL

    def test_numeric_strings_are_numerical(self):
        assert infer_column_type(['1', '2', '3']) == FeatureType.NUMERICAL

    def test_nulls_are_ignored(self):
        assert infer_column_type([1, None, 2, '', 3]) == FeatureType.NUMERICAL
        assert infer_column_type(['a', None, 'b', None]) == FeatureType.BINARY

    def test_low_cardinality_text_is_categorical(self):
        assert infer_column_type(['S', 'C', 'Q', 'S']) == FeatureType.CATEGORICAL

    def test_high_cardinality_text_is_categorical(self):
        values = [f"name_{i}" for i in range(25)]
        assert infer_column_type(values) == FeatureType.CATEGORICAL

    def test_mixed_column_is_categorical(self):
        assert infer_column_type([113803, 'PC 17599', 'A/5 21171']) == FeatureType.CATEGORICAL

    def test_all_null_column_is_categorical(self):
        assert infer_column_type([None, None, '']) == FeatureType.CATEGORICAL
        assert infer_column_type([]) == FeatureType.CATEGORICAL

    @pytest.mark.parametrize("values", [
        [1, 2, 3],
        ['a', 'b'],
        ['low', 'medium', 'high', 'medium'],
        [None],
        [f"v{i}" for i in range(15)],
    ])
    def test_ordinal_is_never_inferred(self, values):
        assert infer_column_type(values) != FeatureType.ORDINAL

    def test_is_fully_numeric(self):
        assert is_fully_numeric([1, 2.5, None])
        assert not is_fully_numeric([1, 'x'])
        assert not is_fully_numeric([None, None])

class TestColumnProfile:

    @pytest.fixture
    def dataset(self):
        csv_text = "\n".join([
            "id,sex,age,embarked",
            "1,male,22,S",
            "2,female,NA,C",
            "3,female,26,S",
            "4,male,,Q",
        ])
        return parse_csv(csv_text)

    def test_two_valued_numeric_profile(self, dataset):
        """Two distinct ages make the column binary while storage stays numeric"""
        profile = get_column_profile(dataset, 'age')

        assert profile == ColumnProfile(
            name='age',
            feature_type=FeatureType.BINARY,
            storage_kind=StorageKind.NUMBER,
            null_count=2,
            unique_count=2,
        )

    def test_binary_profile_keeps_text_storage(self, dataset):
        profile = get_column_profile(dataset, 'sex')

        assert profile.feature_type == FeatureType.BINARY
        assert profile.storage_kind == StorageKind.TEXT
        assert profile.null_count == 0
        assert profile.unique_count == 2

    def test_categorical_profile(self, dataset):
        profile = get_column_profile(dataset, 'embarked')

        assert profile.feature_type == FeatureType.CATEGORICAL
        assert profile.unique_count == 3

    def test_empty_strings_count_as_nulls(self):
        profile = profile_values('col', ['a', '', None, 'b', 'c'])

        assert profile.null_count == 2
        assert profile.unique_count == 3

    def test_unknown_column_is_degenerate(self, dataset):
        profile = get_column_profile(dataset, 'does_not_exist')

        assert profile.null_count == 4
        assert profile.unique_count == 0
        assert profile.storage_kind == StorageKind.TEXT

    def test_profile_is_idempotent(self, dataset):
        """Profiling the same column twice gives equal results"""
        first = get_column_profile(dataset, 'id')
        second = get_column_profile(dataset, 'id')

        assert first == second
        assert first.feature_type == FeatureType.NUMERICAL

    def test_profiles_follow_column_order(self, dataset):
        profiles = get_column_profiles(dataset)

        assert [p.name for p in profiles] == ['id', 'sex', 'age', 'embarked']

    def test_to_dict_uses_plain_values(self, dataset):
        data = get_column_profile(dataset, 'sex').to_dict()

        assert data == {
            'name': 'sex',
            'feature_type': 'binary',
            'storage_kind': 'text',
            'null_count': 0,
            'unique_count': 2,
        }
