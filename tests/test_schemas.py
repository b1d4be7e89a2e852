import pytest
from pydantic import ValidationError

from kubelogs.config import settings
from kubelogs.schemas import LogOptions, LogRequest, ResourceKind


def test_accepts_camel_case_fields():
    req = LogRequest.model_validate(
        {
            "resourceType": "Deployment",
            "name": "api",
            "namespace": "shop",
            "sinceTime": "2024-01-01T00:00:00Z",
            "context": "prod",
        }
    )
    assert req.resource_kind == ResourceKind.DEPLOYMENT
    assert req.since_time == "2024-01-01T00:00:00Z"
    assert req.options().since_time == "2024-01-01T00:00:00Z"


def test_label_group_kind_spellings():
    req = LogRequest(resource_kind="LABEL_GROUP", label_selector="app=web")
    assert req.resource_kind == ResourceKind.LABEL_GROUP
    assert req.name is None


def test_name_required_unless_label_group():
    with pytest.raises(ValidationError, match="name is required"):
        LogRequest(resource_kind="pod")


def test_label_group_requires_selector():
    with pytest.raises(ValidationError, match="label_selector is required"):
        LogRequest(resource_kind="label-group", name="ignored")


def test_unknown_kind_rejected():
    with pytest.raises(ValidationError):
        LogRequest(resource_kind="statefulset", name="db")


def test_namespace_defaults():
    assert LogRequest(resource_kind="pod", name="p").namespace == settings.namespace
    assert LogRequest(resource_kind="pod", name="p", namespace="").namespace == settings.namespace


def test_option_flags_in_fixed_order():
    opts = LogOptions(
        follow=True, previous=True, timestamps=True,
        since_time="2024-01-01T00:00:00Z", since="1h", tail=0, container="app",
    )
    assert opts.to_args() == [
        "-c", "app", "--tail=0", "--since=1h", "--since-time=2024-01-01T00:00:00Z",
        "--timestamps", "--previous", "--follow",
    ]


def test_no_flags_by_default():
    assert LogOptions().to_args() == []


def test_negative_tail_rejected():
    with pytest.raises(ValidationError):
        LogOptions(tail=-1)
