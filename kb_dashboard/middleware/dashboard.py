import logging

from kb_dashboard.middleware.clusters import kinds_aggregation, list_index_names
from kb_dashboard.models.cluster import Cluster
from kb_dashboard.models.dashboard import DashboardSettings, DashboardView
from kb_dashboard.models.kinds import aggregate_kinds
from kb_dashboard.models.revision import resolve_revisions

logger = logging.getLogger(__name__)


def build_dashboard_view(cluster: Cluster, settings: DashboardSettings) -> DashboardView:
    """
    Fetch the index list and the kinds aggregation and merge them into a view.

    Errors from either cluster call are not caught here: a failed call fails the whole view.
    """
    index_names = list_index_names(cluster, timeout=settings.request_timeout)
    indices = resolve_revisions(index_names, prefix=settings.index_prefix)

    buckets = kinds_aggregation(cluster,
                                pattern=settings.kinds_pattern,
                                field=settings.kind_field,
                                size=settings.kinds_size,
                                timeout=settings.request_timeout)
    kinds = aggregate_kinds(buckets)

    logger.debug(f"Dashboard view: {len(indices)} revision(s), {len(kinds)} kind(s)")
    return DashboardView(indices=indices, kinds=kinds)
