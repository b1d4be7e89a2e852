"""Entry point: one `LogRequest` in, one report out."""

from __future__ import annotations

import logging

from .aggregator import FetchScope, aggregate_cronjob, aggregate_selector, fetch_pod
from .kubectl import KubectlClient
from .resolver import CronJobTarget, PodTarget, ResolutionError, resolve
from .schemas import ClassifiedError, ErrorKind, LogRequest, NoMatchesReport, PodLogsReport, Report

logger = logging.getLogger(__name__)


def get_logs(request: LogRequest, client: KubectlClient | None = None) -> Report:
    """Resolve `request`, fetch every matching pod and return the combined report.

    Per-pod failures are recorded in the report. A failure to resolve the
    target is returned as a payload when it is classifiable (not_found,
    multi_container_ambiguous) and raised as `ResolutionError` otherwise.
    """
    client = client or KubectlClient()
    scope = FetchScope(
        client=client,
        namespace=request.namespace,
        options=request.options(),
        context=request.context,
    )

    try:
        target = resolve(request, client)
        if isinstance(target, NoMatchesReport):
            return target

        if isinstance(target, PodTarget):
            outcome = fetch_pod(target.pod_name, scope)
            if isinstance(outcome, ClassifiedError):
                return outcome
            return PodLogsReport(name=target.pod_name, logs=outcome)

        if isinstance(target, CronJobTarget):
            return aggregate_cronjob(target, scope)

        return aggregate_selector(target.selector, scope)
    except ResolutionError as e:
        if e.error.kind == ErrorKind.GENERAL:
            raise
        logger.warning(
            "Resolving %s %s: %s",
            request.resource_kind.value,
            request.name or request.label_selector,
            e.error.message,
        )
        return e.error
