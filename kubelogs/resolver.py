"""Resolve a `LogRequest` into the pods (or jobs, then pods) to read logs from.

Resolution is two composable stages:

1. `resolve()` maps the request to a target: a single pod, a label selector,
   or for cronjobs one selector per dependent job.
2. `discover_pods()` maps a selector to the pod names currently matching it.

Jobs and cronjobs share stage 2; a cronjob only adds the job listing in front.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Union

from .classifier import classify_error
from .kubectl import KubectlClient, KubectlError
from .schemas import ClassifiedError, ErrorKind, LogRequest, NoMatchesReport, ResourceKind

logger = logging.getLogger(__name__)

JOB_NAME_LABEL = "job-name"
MATCH_LABELS_PATH = "{.spec.selector.matchLabels}"


class LogsError(Exception):
    """Request-level failure carrying its classified payload."""

    def __init__(self, error: ClassifiedError):
        super().__init__(error.message)
        self.error = error


class UnsupportedResourceError(LogsError):
    pass


class ResolutionError(LogsError):
    """The set of pods to fetch could not be determined."""


@dataclass
class PodTarget:
    pod_name: str


@dataclass
class SelectorTarget:
    selector: str


@dataclass
class JobSelector:
    job_name: str
    selector: str


@dataclass
class CronJobTarget:
    cronjob: str
    jobs: List[JobSelector] = field(default_factory=list)


ResolvedTarget = Union[PodTarget, SelectorTarget, CronJobTarget, NoMatchesReport]


def job_selector(job_name: str) -> str:
    return f"{JOB_NAME_LABEL}={job_name}"


def selector_from_labels(labels: Dict[str, str]) -> str:
    """Render match-labels as ``k=v,k2=v2`` keeping their order."""
    return ",".join(f"{k}={v}" for k, v in labels.items())


def _resolution_failed(error: KubectlError, resource: str) -> ResolutionError:
    return ResolutionError(classify_error(error, resource))


def discover_pods(selector: str, namespace: str, client: KubectlClient, context: str | None = None) -> List[str]:
    try:
        pods = client.list_names("pods", selector, namespace, context)
    except KubectlError as e:
        raise _resolution_failed(e, f'pods with selector "{selector}"') from e
    logger.info("Selector %s matched %d pod(s) in %s", selector, len(pods), namespace)
    return pods


def _resolve_pod(request: LogRequest, client: KubectlClient) -> ResolvedTarget:
    return PodTarget(request.name)


def _resolve_label_group(request: LogRequest, client: KubectlClient) -> ResolvedTarget:
    return SelectorTarget(request.label_selector)


def _resolve_job(request: LogRequest, client: KubectlClient) -> ResolvedTarget:
    return SelectorTarget(job_selector(request.name))


def _resolve_deployment(request: LogRequest, client: KubectlClient) -> ResolvedTarget:
    resource = f"deployment {request.name}"
    try:
        raw = client.read("deployment", request.name, request.namespace, MATCH_LABELS_PATH, request.context)
    except KubectlError as e:
        raise _resolution_failed(e, resource) from e

    try:
        labels = json.loads(raw)
    except json.JSONDecodeError:
        labels = None
    if not isinstance(labels, dict) or not labels:
        raise ResolutionError(
            ClassifiedError(
                kind=ErrorKind.GENERAL,
                message=f"Could not parse selector for {resource}",
                original_error=raw,
            )
        )
    return SelectorTarget(selector_from_labels(labels))


def _resolve_cronjob(request: LogRequest, client: KubectlClient) -> ResolvedTarget:
    # Jobs spawned by a cronjob are matched with the same label key that
    # links pods to their job.
    try:
        jobs = client.list_names("jobs", job_selector(request.name), request.namespace, request.context)
    except KubectlError as e:
        raise _resolution_failed(e, f"cronjob {request.name}") from e

    if not jobs:
        return NoMatchesReport(
            message=f"No jobs found for cronjob {request.name} in namespace {request.namespace}",
            namespace=request.namespace,
        )
    return CronJobTarget(request.name, [JobSelector(job, job_selector(job)) for job in jobs])


RESOLVERS: Dict[ResourceKind, Callable[[LogRequest, KubectlClient], ResolvedTarget]] = {
    ResourceKind.POD: _resolve_pod,
    ResourceKind.DEPLOYMENT: _resolve_deployment,
    ResourceKind.JOB: _resolve_job,
    ResourceKind.CRONJOB: _resolve_cronjob,
    ResourceKind.LABEL_GROUP: _resolve_label_group,
}


def resolve(request: LogRequest, client: KubectlClient) -> ResolvedTarget:
    resolver = RESOLVERS.get(request.resource_kind)
    if resolver is None:
        kind = getattr(request.resource_kind, "value", request.resource_kind)
        raise UnsupportedResourceError(
            ClassifiedError(kind=ErrorKind.GENERAL, message=f"Unsupported resource type: {kind}")
        )
    target = resolver(request, client)
    logger.info("Resolved %s %s to %s", request.resource_kind.value, request.name or request.label_selector, target)
    return target
