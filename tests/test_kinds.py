import pytest

from kb_dashboard.models.kinds import KindCount, aggregate_kinds, key_to_string


def test_aggregate_preserves_order_and_counts():
    buckets = [{"key": "doc", "doc_count": 5}, {"key": "page", "doc_count": 2}]
    assert aggregate_kinds(buckets) == [KindCount("doc", 5), KindCount("page", 2)]


def test_aggregate_does_not_sort_by_count():
    buckets = [{"key": "a", "doc_count": 1}, {"key": "b", "doc_count": 100}]
    assert [k.kind for k in aggregate_kinds(buckets)] == ["a", "b"]


def test_absent_aggregation_is_empty():
    assert aggregate_kinds(None) == []


def test_empty_buckets_is_empty():
    assert aggregate_kinds([]) == []


def test_large_counts_keep_precision():
    big = 2 ** 62 + 1
    assert aggregate_kinds([{"key": "doc", "doc_count": big}]) == [KindCount("doc", big)]


def test_extra_bucket_fields_ignored():
    buckets = [{"key": 1, "key_as_string": "true", "doc_count": 3}]
    assert aggregate_kinds(buckets) == [KindCount("1", 3)]


@pytest.mark.parametrize("key, expected", [
    ("article", "article"),
    ("", ""),
    (True, "true"),
    (False, "false"),
    (0, "0"),
    (42, "42"),
    (-7, "-7"),
    (5.0, "5"),
    (1.5, "1.5"),
    (None, "null"),
])
def test_key_to_string(key, expected):
    assert key_to_string(key) == expected


def test_mixed_key_types():
    buckets = [
        {"key": "doc", "doc_count": 4},
        {"key": 3, "doc_count": 2},
        {"key": True, "doc_count": 1},
    ]
    assert aggregate_kinds(buckets) == [KindCount("doc", 4), KindCount("3", 2), KindCount("true", 1)]
