# backend/routers/logs.py

from typing import Optional

from fastapi import APIRouter, HTTPException, Query
from pydantic import ValidationError

from backend.services.logs_service import logs_service
from kubelogs.resolver import ResolutionError, UnsupportedResourceError
from kubelogs.schemas import LogRequest, ResourceKind, render

router = APIRouter(tags=["Logs"])


def _collect(request: LogRequest) -> dict:
    try:
        report = logs_service.get_logs(request)
    except UnsupportedResourceError as e:
        raise HTTPException(status_code=400, detail=render(e.error))
    except ResolutionError as e:
        raise HTTPException(status_code=502, detail=render(e.error))
    return render(report)


@router.post("/logs")
def collect_logs(request: LogRequest):
    """
    Logs for a pod, deployment, job, cronjob or label-selected group of pods.
    """
    return _collect(request)


@router.get("/logs")
def get_pod_logs(
    pod_name: str = Query(..., description="Pod name"),
    namespace: Optional[str] = Query(None, description="Namespace (defaults to KUBELOGS_NAMESPACE)"),
    container: Optional[str] = Query(None, description="Container name for multi-container pods"),
    tail: int = Query(100, ge=1, le=5000, description="Tail lines"),
):
    """
    Return raw logs for a single pod.
    """
    try:
        request = LogRequest(
            resource_kind=ResourceKind.POD,
            name=pod_name.strip(),
            namespace=namespace,
            container=container,
            tail=tail,
        )
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False))
    return _collect(request)
