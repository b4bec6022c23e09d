import logging
import re
from typing import Iterable, List, NamedTuple, Optional

logger = logging.getLogger(__name__)

DEFAULT_INDEX_PREFIX = "kb-rev"

# Signed base-10 integer, ASCII digits only. int() alone would also accept
# surrounding whitespace, underscores and non-ASCII digits.
REVISION_SUFFIX_PATTERN = re.compile(r"[+-]?[0-9]+")
# Revisions are signed 64-bit integers, suffixes outside that range are not revisions
MIN_REVISION = -2 ** 63
MAX_REVISION = 2 ** 63 - 1
MAX_REVISION_DIGITS = len(str(MAX_REVISION))


class IndexRevision(NamedTuple):
    index: str
    rev: int


def parse_revision(index_name: str, prefix: str) -> Optional[int]:
    """Return the revision number encoded in `index_name`, or None if the name
    doesn't follow the `<prefix><integer>` convention."""
    if not index_name.startswith(prefix):
        return None
    suffix = index_name[len(prefix):]
    if not REVISION_SUFFIX_PATTERN.fullmatch(suffix):
        return None
    if len(suffix.lstrip("+-").lstrip("0")) > MAX_REVISION_DIGITS:
        return None
    rev = int(suffix)
    if not MIN_REVISION <= rev <= MAX_REVISION:
        return None
    return rev


def resolve_revisions(index_names: Iterable[str], prefix: str = DEFAULT_INDEX_PREFIX) -> List[IndexRevision]:
    """
    Turn the cluster's index names into the list of known revisions, newest first.

    Names that don't start with `prefix`, or whose remainder isn't an integer, are skipped.
    When nothing matches, a single `<prefix>1` revision is returned so that there is
    always a revision to target.
    """
    revisions = []
    for name in index_names:
        rev = parse_revision(name, prefix)
        if rev is None:
            continue
        revisions.append(IndexRevision(index=name, rev=rev))

    # sorted() is stable, so equal revisions keep their input order
    revisions = sorted(revisions, key=lambda r: r.rev, reverse=True)

    if not revisions:
        logger.info(f"No indices matching '{prefix}<rev>' found, defaulting to {prefix}1")
        revisions.append(IndexRevision(index=f"{prefix}1", rev=1))
    return revisions
