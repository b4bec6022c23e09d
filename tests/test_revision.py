import pytest

from kb_dashboard.models.revision import IndexRevision, parse_revision, resolve_revisions

PREFIX = "kb-rev"


def test_revisions_sorted_newest_first_and_unrelated_indices_skipped():
    result = resolve_revisions(["kb-rev3", "kb-rev1", "other-index", "kb-rev2"], PREFIX)
    assert result == [
        IndexRevision("kb-rev3", 3),
        IndexRevision("kb-rev2", 2),
        IndexRevision("kb-rev1", 1),
    ]


def test_no_indices_defaults_to_first_revision():
    assert resolve_revisions([], PREFIX) == [IndexRevision("kb-rev1", 1)]


def test_only_unparseable_indices_defaults_to_first_revision():
    names = ["kb-rev-legacy", "kb-rev", ".kibana", "kb-revision", "kb-rev1a"]
    assert resolve_revisions(names, PREFIX) == [IndexRevision("kb-rev1", 1)]


def test_default_uses_given_prefix():
    assert resolve_revisions(["kb-rev4"], "docs-v") == [IndexRevision("docs-v1", 1)]


def test_unparseable_suffix_dropped_next_to_valid_ones():
    result = resolve_revisions(["kb-rev-legacy", "kb-rev10", "kb-rev9"], PREFIX)
    assert result == [IndexRevision("kb-rev10", 10), IndexRevision("kb-rev9", 9)]


def test_numeric_not_lexicographic_order():
    result = resolve_revisions(["kb-rev2", "kb-rev10", "kb-rev100", "kb-rev9"], PREFIX)
    assert [r.rev for r in result] == [100, 10, 9, 2]


def test_prefix_must_lead():
    assert resolve_revisions(["old-kb-rev5", "xkb-rev6"], PREFIX) == [IndexRevision("kb-rev1", 1)]


@pytest.mark.parametrize("name, expected", [
    ("kb-rev7", 7),
    ("kb-rev007", 7),
    ("kb-rev0", 0),
    ("kb-rev-3", -3),
    ("kb-rev+4", 4),
    ("kb-rev9223372036854775807", 2 ** 63 - 1),
    ("kb-rev-9223372036854775808", -2 ** 63),
])
def test_parse_revision_accepts_signed_integers(name, expected):
    assert parse_revision(name, PREFIX) == expected


@pytest.mark.parametrize("name", [
    "kb-rev",
    "kb-rev-",
    "kb-rev 1",
    "kb-rev1 ",
    "kb-rev1_000",
    "kb-rev1.5",
    "kb-rev0x10",
    "kb-rev١",
    "kb-rev-legacy",
    "kb-rev9223372036854775808",
    "kb-rev-9223372036854775809",
    "kb-rev99999999999999999999",
    "kb-rev" + "9" * 5000,
    "kb-re1",
    "other",
])
def test_parse_revision_rejects_non_integers(name):
    assert parse_revision(name, PREFIX) is None


def test_negative_revisions_sort_last():
    result = resolve_revisions(["kb-rev-1", "kb-rev0", "kb-rev2"], PREFIX)
    assert [r.rev for r in result] == [2, 0, -1]


def test_ties_keep_input_order():
    result = resolve_revisions(["kb-rev02", "kb-rev1", "kb-rev2"], PREFIX)
    assert result == [
        IndexRevision("kb-rev02", 2),
        IndexRevision("kb-rev2", 2),
        IndexRevision("kb-rev1", 1),
    ]


def test_duplicate_names_are_not_deduplicated():
    result = resolve_revisions(["kb-rev2", "kb-rev2"], PREFIX)
    assert result == [IndexRevision("kb-rev2", 2), IndexRevision("kb-rev2", 2)]


def test_accepts_any_iterable():
    result = resolve_revisions((name for name in ["kb-rev1", "kb-rev5"]), PREFIX)
    assert result[0] == IndexRevision("kb-rev5", 5)


def test_output_is_never_empty_and_descending():
    inputs = [
        [],
        ["foo"],
        ["kb-rev5", "kb-rev3", "kb-rev8", "kb-rev3"],
        ["kb-rev1", "kb-revx", "bar", "kb-rev-2"],
    ]
    for names in inputs:
        result = resolve_revisions(names, PREFIX)
        assert result
        assert all(result[i].rev >= result[i + 1].rev for i in range(len(result) - 1))
        assert all(r.index.startswith(PREFIX) for r in result)


def test_out_of_range_suffix_is_not_a_revision():
    result = resolve_revisions(["kb-rev99999999999999999999", "kb-rev3"], PREFIX)
    assert result == [IndexRevision("kb-rev3", 3)]
