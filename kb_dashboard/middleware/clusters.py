from kb_dashboard.models.cluster import Cluster, HttpMethod
from kb_dashboard.models.kinds import DEFAULT_KIND_FIELD, DEFAULT_KINDS_PATTERN, DEFAULT_KINDS_SIZE
from dataclasses import dataclass
import json
import logging
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

KINDS_AGGREGATION_NAME = "kinds"


@dataclass
class ConnectionResult:
    connection_message: str
    connection_established: bool
    cluster_version: Optional[str]


def cat_indices(cluster: Cluster, as_json=False, timeout=None):
    as_json_suffix = "?format=json" if as_json else "?v=true"
    cat_indices_path = f"/_cat/indices{as_json_suffix}"
    r = cluster.call_api(cat_indices_path, timeout=timeout)
    return r.json() if as_json else r.content


def list_index_names(cluster: Cluster, timeout=None) -> List[str]:
    """Names of every index on the cluster. Only the `index` column of `_cat/indices` is used."""
    return [row["index"] for row in cat_indices(cluster, as_json=True, timeout=timeout)]


def kinds_aggregation(cluster: Cluster, pattern: str = DEFAULT_KINDS_PATTERN, field: str = DEFAULT_KIND_FIELD,
                      size: int = DEFAULT_KINDS_SIZE, timeout=None) -> Optional[List[Dict[str, Any]]]:
    """
    Run a size 0 search over `pattern` with a terms aggregation on `field`.

    Returns the aggregation's buckets, or None when the response carries no such aggregation.
    """
    body = json.dumps({
        "size": 0,
        "aggs": {
            KINDS_AGGREGATION_NAME: {
                "terms": {"field": field, "size": size}
            }
        }
    })
    r = cluster.call_api(f"/{pattern}/_search", method=HttpMethod.POST, data=body,
                         headers={'Content-Type': 'application/json'}, timeout=timeout)
    aggregation = (r.json().get("aggregations") or {}).get(KINDS_AGGREGATION_NAME)
    if aggregation is None:
        logger.info(f"No '{KINDS_AGGREGATION_NAME}' aggregation returned for pattern {pattern}")
        return None
    return aggregation.get("buckets", [])


def connection_check(cluster: Cluster) -> ConnectionResult:
    cluster_details_path = "/"
    caught_exception = None
    r = None
    try:
        r = cluster.call_api(cluster_details_path, timeout=3)
    except Exception as e:
        caught_exception = e
        logger.debug(f"Unable to access cluster: {cluster} with exception: {e}")
    if caught_exception is None:
        response_json = r.json()
        return ConnectionResult(connection_message="Successfully connected!",
                                connection_established=True,
                                cluster_version=response_json.get('version', {}).get('number'))
    else:
        return ConnectionResult(connection_message=f"Unable to connect to cluster with error: {caught_exception}",
                                connection_established=False,
                                cluster_version=None)
