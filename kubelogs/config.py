import os
from dataclasses import dataclass

@dataclass
class Settings:
    kubectl_bin: str = os.getenv("KUBECTL_BIN", "kubectl")
    kubeconfig: str | None = os.getenv("KUBECONFIG") or None
    namespace: str = os.getenv("KUBELOGS_NAMESPACE", "default")
    timeout: float = float(os.getenv("KUBELOGS_TIMEOUT", "30"))
    max_output_bytes: int = int(os.getenv("KUBELOGS_MAX_OUTPUT_BYTES", str(10 * 1024 * 1024)))
    max_workers: int = int(os.getenv("KUBELOGS_MAX_WORKERS", "8"))
    log_level: str = os.getenv("KUBELOGS_LOG_LEVEL", "INFO").upper()

settings = Settings()
