from typing import Any, Iterable, List, Mapping, NamedTuple, Optional

DEFAULT_KIND_FIELD = "kind"
DEFAULT_KINDS_PATTERN = "kb-*"
# Terms aggregations only return the top N buckets; this is large enough to cover every kind in practice.
DEFAULT_KINDS_SIZE = 9999
BUCKET_KEY = "key"
BUCKET_DOC_COUNT_KEY = "doc_count"


class KindCount(NamedTuple):
    kind: str
    count: int


def key_to_string(key: Any) -> str:
    """
    Convert a terms aggregation bucket key to its display string.

    Keys are untyped JSON scalars, so each type is handled explicitly rather than
    relying on str(), which would render booleans as "True" and whole floats as "5.0".
    """
    if isinstance(key, str):
        return key
    # bool is a subclass of int, check it first
    if isinstance(key, bool):
        return "true" if key else "false"
    if isinstance(key, int):
        return str(key)
    if isinstance(key, float):
        if key.is_integer():
            return str(int(key))
        return repr(key)
    if key is None:
        return "null"
    return str(key)


def aggregate_kinds(buckets: Optional[Iterable[Mapping[str, Any]]]) -> List[KindCount]:
    """
    Reduce the buckets of the kinds terms aggregation into (kind, count) pairs.

    Order is preserved and nothing is filtered. A missing aggregation (None) yields an empty list.
    """
    if buckets is None:
        return []
    return [KindCount(kind=key_to_string(bucket.get(BUCKET_KEY)), count=int(bucket.get(BUCKET_DOC_COUNT_KEY, 0)))
            for bucket in buckets]
