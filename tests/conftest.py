import pytest

from kubelogs.kubectl import KubectlError


def not_found(kind: str, name: str) -> KubectlError:
    return KubectlError(1, f'Error from server (NotFound): {kind} "{name}" not found')


class FakeKubectl:
    """Stands in for KubectlClient; answers come from plain dicts.

    A value that is an exception is raised instead of returned.
    """

    def __init__(self):
        self.deployments = {}  # name -> raw matchLabels jsonpath output
        self.pods = {}  # selector -> pod names
        self.jobs = {}  # selector -> job names
        self.pod_logs = {}  # pod name -> log text
        self.calls = []

    @staticmethod
    def _answer(table, key, default):
        value = table.get(key, default)
        if isinstance(value, Exception):
            raise value
        return value

    def read(self, kind, name, namespace, path, context=None):
        self.calls.append(("read", kind, name, namespace, context))
        return self._answer(self.deployments, name, not_found("deployments.apps", name))

    def list_names(self, collection, selector, namespace, context=None):
        self.calls.append(("list", collection, selector, namespace, context))
        table = self.pods if collection == "pods" else self.jobs
        return list(self._answer(table, selector, []))

    def logs(self, pod_name, namespace, options, context=None):
        self.calls.append(("logs", pod_name, namespace, options, context))
        return self._answer(self.pod_logs, pod_name, not_found("pods", pod_name))


@pytest.fixture
def kubectl():
    return FakeKubectl()
