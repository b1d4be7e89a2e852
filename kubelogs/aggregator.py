"""Fan `kubectl logs` out over a resolved pod set and build one report."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Dict, Iterable, Union

from .classifier import classify_error
from .config import settings
from .kubectl import KubectlClient, KubectlError
from .resolver import CronJobTarget, discover_pods
from .schemas import CronJobLogsReport, LogOptions, NoMatchesReport, Outcome, SelectorLogsReport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FetchScope:
    """Everything one request's fetches have in common."""

    client: KubectlClient
    namespace: str
    options: LogOptions
    context: str | None = None
    max_workers: int = settings.max_workers


def fetch_pod(pod_name: str, scope: FetchScope) -> Outcome:
    try:
        return scope.client.logs(pod_name, scope.namespace, scope.options, scope.context)
    except KubectlError as e:
        logger.warning("Fetching logs for pod %s failed (status=%s): %s", pod_name, e.status, e.message)
        return classify_error(e, f"pod {pod_name}")


def fetch_all(pod_names: Iterable[str], scope: FetchScope) -> Dict[str, Outcome]:
    """Fetch every pod; the result is keyed in input order, whatever order fetches finish in."""
    names = [name for name in pod_names if name]
    if not names:
        return {}

    workers = max(1, min(scope.max_workers, len(names)))
    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = {name: pool.submit(fetch_pod, name, scope) for name in names}
    return {name: future.result() for name, future in futures.items()}


def aggregate_selector(selector: str, scope: FetchScope) -> Union[SelectorLogsReport, NoMatchesReport]:
    pods = discover_pods(selector, scope.namespace, scope.client, scope.context)
    if not pods:
        return NoMatchesReport(
            message=f'No pods found with label selector "{selector}" in namespace {scope.namespace}',
            namespace=scope.namespace,
            selector=selector,
        )
    return SelectorLogsReport(selector=selector, namespace=scope.namespace, logs=fetch_all(pods, scope))


def aggregate_cronjob(target: CronJobTarget, scope: FetchScope) -> CronJobLogsReport:
    report = CronJobLogsReport(cronjob=target.cronjob, namespace=scope.namespace)
    for job in target.jobs:
        result = aggregate_selector(job.selector, scope)
        report.jobs[job.job_name] = result.logs if isinstance(result, SelectorLogsReport) else result
    return report
