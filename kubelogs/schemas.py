from enum import Enum
from typing import Optional, List, Dict, Any, Union

from pydantic import BaseModel, ConfigDict, Field, AliasChoices, field_validator, model_validator

from .config import settings


class ResourceKind(str, Enum):
    POD = "pod"
    DEPLOYMENT = "deployment"
    JOB = "job"
    CRONJOB = "cronjob"
    LABEL_GROUP = "label-group"


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    MULTI_CONTAINER_AMBIGUOUS = "multi_container_ambiguous"
    GENERAL = "general"


class LogOptions(BaseModel):
    """Options shared by every `kubectl logs` call of one request."""

    model_config = ConfigDict(populate_by_name=True)

    container: Optional[str] = None
    tail: Optional[int] = Field(default=None, ge=0)
    since: Optional[str] = None
    since_time: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("since_time", "sinceTime")
    )
    timestamps: bool = False
    previous: bool = False
    follow: bool = False

    def to_args(self) -> List[str]:
        args: List[str] = []
        if self.container:
            args.extend(["-c", self.container])
        if self.tail is not None:
            args.append(f"--tail={self.tail}")
        if self.since:
            args.append(f"--since={self.since}")
        if self.since_time:
            args.append(f"--since-time={self.since_time}")
        if self.timestamps:
            args.append("--timestamps")
        if self.previous:
            args.append("--previous")
        if self.follow:
            args.append("--follow")
        return args


class LogRequest(LogOptions):
    resource_kind: ResourceKind = Field(
        validation_alias=AliasChoices("resource_kind", "resourceKind", "resourceType")
    )
    name: Optional[str] = None
    namespace: str = Field(default_factory=lambda: settings.namespace)
    label_selector: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("label_selector", "labelSelector")
    )
    context: Optional[str] = None

    @field_validator("resource_kind", mode="before")
    @classmethod
    def _normalize_kind(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().lower().replace("_", "-")
        return v

    @field_validator("namespace", mode="before")
    @classmethod
    def _default_namespace(cls, v: Any) -> Any:
        return v or settings.namespace

    @model_validator(mode="after")
    def _check_locator(self) -> "LogRequest":
        if self.resource_kind == ResourceKind.LABEL_GROUP:
            if not self.label_selector:
                raise ValueError("label_selector is required for resource kind 'label-group'")
        elif not self.name:
            raise ValueError(f"name is required for resource kind '{self.resource_kind.value}'")
        return self

    def options(self) -> LogOptions:
        return LogOptions(**self.model_dump(include=set(LogOptions.model_fields)))


class ClassifiedError(BaseModel):
    """A failed external call, normalized into one of the `ErrorKind` buckets.

    Serialized as ``{"error": ..., "status": <kind>, ...detail}``.
    """

    model_config = ConfigDict(populate_by_name=True)

    message: str = Field(serialization_alias="error")
    kind: ErrorKind = Field(serialization_alias="status")
    pod_name: Optional[str] = None
    available_containers: Optional[List[str]] = None
    init_containers: Optional[List[str]] = None
    suggestion: Optional[str] = None
    original_error: Optional[str] = None


# A single pod's fetch result: raw log text, or the classified failure.
Outcome = Union[str, ClassifiedError]


class PodLogsReport(BaseModel):
    name: str
    logs: str


class NoMatchesReport(BaseModel):
    message: str
    namespace: str
    selector: Optional[str] = None


class SelectorLogsReport(BaseModel):
    selector: str
    namespace: str
    logs: Dict[str, Outcome] = Field(default_factory=dict)


class CronJobLogsReport(BaseModel):
    cronjob: str
    namespace: str
    jobs: Dict[str, Union[Dict[str, Outcome], NoMatchesReport]] = Field(default_factory=dict)


Report = Union[PodLogsReport, SelectorLogsReport, CronJobLogsReport, NoMatchesReport, ClassifiedError]


def render(report: BaseModel) -> Dict[str, Any]:
    """Plain-dict form of a report, as handed to callers."""
    return report.model_dump(mode="json", by_alias=True, exclude_none=True)
