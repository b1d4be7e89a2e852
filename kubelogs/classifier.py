"""Turn kubectl failure text into a `ClassifiedError`.

kubectl's wording is not a stable interface, so each rule is a small
matcher over module-level marker constants. Updating for a new kubectl
release should only mean touching the constants below.
"""

from __future__ import annotations

import re
from typing import List, Optional

from .kubectl import KubectlError
from .schemas import ClassifiedError, ErrorKind

NOT_FOUND_STATUSES = (404,)
NOT_FOUND_MARKERS = ("not found", "(NotFound)")

CONTAINER_REQUIRED_MARKERS = ("a container name must be specified", "choose one of:")
POD_NAME_PATTERN = re.compile(r"for pod ([^,]+)")
CONTAINERS_PATTERN = re.compile(r"choose one of: \[([^\]]*)\]")
INIT_CONTAINERS_PATTERN = re.compile(r"or one of the init containers: \[([^\]]*)\]")


def is_not_found(status: Optional[int], message: str) -> bool:
    return status in NOT_FOUND_STATUSES or any(m in message for m in NOT_FOUND_MARKERS)


def is_container_required(message: str) -> bool:
    return any(m in message for m in CONTAINER_REQUIRED_MARKERS)


def _bracket_list(pattern: re.Pattern, message: str) -> List[str]:
    m = pattern.search(message)
    if not m:
        return []
    return [c.strip() for c in m.group(1).split() if c.strip()]


def container_choices(message: str) -> ClassifiedError:
    m = POD_NAME_PATTERN.search(message)
    pod_name = m.group(1).strip() if m else "unknown"
    containers = _bracket_list(CONTAINERS_PATTERN, message)
    init_containers = _bracket_list(INIT_CONTAINERS_PATTERN, message)

    suggestion = (
        "Please specify a container name using the 'container' parameter. "
        f"Available containers: {', '.join(containers)}"
    )
    if init_containers:
        suggestion += f". Init containers: {', '.join(init_containers)}"

    return ClassifiedError(
        kind=ErrorKind.MULTI_CONTAINER_AMBIGUOUS,
        message="Multi-container pod requires container specification",
        pod_name=pod_name,
        available_containers=containers,
        init_containers=init_containers,
        suggestion=suggestion,
    )


def classify(status: Optional[int], message: str, resource: str) -> ClassifiedError:
    """Classify one failed call. `resource` is a description like ``pod web-1``."""
    if is_not_found(status, message):
        return ClassifiedError(kind=ErrorKind.NOT_FOUND, message=f"Resource {resource} not found")

    if is_container_required(message):
        return container_choices(message)

    return ClassifiedError(
        kind=ErrorKind.GENERAL,
        message=f"Failed to get logs for {resource}: {message}",
        original_error=message,
    )


def classify_error(error: KubectlError, resource: str) -> ClassifiedError:
    return classify(error.status, error.message, resource)
