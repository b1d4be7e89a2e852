import pytest

from kubelogs.kubectl import KubectlError
from kubelogs.resolver import (
    CronJobTarget,
    PodTarget,
    ResolutionError,
    SelectorTarget,
    UnsupportedResourceError,
    discover_pods,
    resolve,
    selector_from_labels,
)
from kubelogs.schemas import ErrorKind, LogRequest, NoMatchesReport


def test_pod_is_identity(kubectl):
    target = resolve(LogRequest(resource_kind="pod", name="web-1"), kubectl)
    assert target == PodTarget("web-1")
    assert kubectl.calls == []


def test_job_selector_needs_no_lookup(kubectl):
    target = resolve(LogRequest(resource_kind="job", name="backup"), kubectl)
    assert target == SelectorTarget("job-name=backup")
    assert kubectl.calls == []


def test_label_group_selector_verbatim(kubectl):
    req = LogRequest(resource_kind="label-group", label_selector="app=web,tier!=cache")
    assert resolve(req, kubectl) == SelectorTarget("app=web,tier!=cache")


def test_deployment_selector_from_match_labels(kubectl):
    kubectl.deployments["api"] = '{"app":"x","tier":"web"}'
    target = resolve(LogRequest(resource_kind="deployment", name="api", namespace="shop"), kubectl)
    assert target == SelectorTarget("app=x,tier=web")
    assert kubectl.calls == [("read", "deployment", "api", "shop", None)]


def test_selector_keeps_label_order():
    assert selector_from_labels({"tier": "web", "app": "x"}) == "tier=web,app=x"


def test_deployment_unparseable_selector(kubectl):
    kubectl.deployments["api"] = "map[app:x]"
    with pytest.raises(ResolutionError) as exc:
        resolve(LogRequest(resource_kind="deployment", name="api"), kubectl)
    assert exc.value.error.kind == ErrorKind.GENERAL
    assert exc.value.error.original_error == "map[app:x]"


def test_deployment_without_match_labels(kubectl):
    kubectl.deployments["api"] = ""
    with pytest.raises(ResolutionError):
        resolve(LogRequest(resource_kind="deployment", name="api"), kubectl)


def test_missing_deployment(kubectl):
    with pytest.raises(ResolutionError) as exc:
        resolve(LogRequest(resource_kind="deployment", name="ghost"), kubectl)
    assert exc.value.error.kind == ErrorKind.NOT_FOUND
    assert exc.value.error.message == "Resource deployment ghost not found"


def test_cronjob_without_jobs(kubectl):
    target = resolve(LogRequest(resource_kind="cronjob", name="nightly", namespace="ops"), kubectl)
    assert isinstance(target, NoMatchesReport)
    assert target.message == "No jobs found for cronjob nightly in namespace ops"
    assert kubectl.calls == [("list", "jobs", "job-name=nightly", "ops", None)]


def test_cronjob_selects_per_job(kubectl):
    kubectl.jobs["job-name=nightly"] = ["nightly-001", "nightly-002"]
    target = resolve(LogRequest(resource_kind="cronjob", name="nightly"), kubectl)
    assert isinstance(target, CronJobTarget)
    assert [(j.job_name, j.selector) for j in target.jobs] == [
        ("nightly-001", "job-name=nightly-001"),
        ("nightly-002", "job-name=nightly-002"),
    ]


def test_unsupported_kind_fails_before_any_call(kubectl):
    req = LogRequest.model_construct(resource_kind="statefulset", name="db", namespace="default")
    with pytest.raises(UnsupportedResourceError) as exc:
        resolve(req, kubectl)
    assert exc.value.error.kind == ErrorKind.GENERAL
    assert "statefulset" in exc.value.error.message
    assert kubectl.calls == []


def test_discover_pods_keeps_listing_order(kubectl):
    kubectl.pods["app=web"] = ["web-b", "web-a"]
    assert discover_pods("app=web", "default", kubectl) == ["web-b", "web-a"]


def test_discover_pods_failure_is_resolution_error(kubectl):
    kubectl.pods["app=web"] = KubectlError(1, "Unable to connect to the server")
    with pytest.raises(ResolutionError) as exc:
        discover_pods("app=web", "default", kubectl)
    assert exc.value.error.kind == ErrorKind.GENERAL
