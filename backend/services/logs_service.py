from kubelogs.kubectl import KubectlClient
from kubelogs.logs import get_logs
from kubelogs.schemas import LogRequest, Report


class LogsService:
    """
    Holds the shared KubectlClient so FastAPI routes can collect logs
    without constructing a client in every router.
    """

    def __init__(self, client: KubectlClient | None = None):
        self.client = client or KubectlClient()

    def get_logs(self, request: LogRequest) -> Report:
        return get_logs(request, self.client)


# Shared singleton instance
logs_service = LogsService()
