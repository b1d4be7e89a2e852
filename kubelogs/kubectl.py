"""Thin kubectl wrapper: the only place that spawns external processes."""

from __future__ import annotations

import logging
import os
import subprocess
from typing import Dict, List

from .config import settings
from .schemas import LogOptions

logger = logging.getLogger(__name__)

NAMES_JSONPATH = "jsonpath={.items[*].metadata.name}"


class KubectlError(Exception):
    """A kubectl invocation that did not produce usable output.

    `status` is the process exit code, or None when the process never
    completed normally (missing binary, timeout, output ceiling).
    """

    def __init__(self, status: int | None, message: str):
        super().__init__(message)
        self.status = status
        self.message = message


class KubectlClient:
    def __init__(
        self,
        binary: str | None = None,
        kubeconfig: str | None = None,
        timeout: float | None = None,
        max_output_bytes: int | None = None,
    ):
        self.binary = binary or settings.kubectl_bin
        self.kubeconfig = kubeconfig or settings.kubeconfig
        self.timeout = timeout or settings.timeout
        self.max_output_bytes = max_output_bytes or settings.max_output_bytes

    # ------------------------------------------------------------------ #
    # Internal helpers                                                   #
    # ------------------------------------------------------------------ #

    def _env(self) -> Dict[str, str]:
        env = os.environ.copy()
        if self.kubeconfig:
            env["KUBECONFIG"] = self.kubeconfig
        return env

    def _command(self, args: List[str], context: str | None) -> List[str]:
        cmd = [self.binary]
        if context:
            cmd.extend(["--context", context])
        return cmd + args

    def _check_size(self, stdout: bytes, args: List[str]) -> str:
        if len(stdout) > self.max_output_bytes:
            raise KubectlError(
                None,
                f"output of '{' '.join(args[:4])}' exceeded {self.max_output_bytes} bytes",
            )
        return stdout.decode("utf-8", errors="replace")

    def _run(self, args: List[str], context: str | None = None, keep_partial: bool = False) -> str:
        """Run kubectl and return stdout.

        With `keep_partial`, hitting the timeout returns whatever was
        captured so far instead of failing.
        """
        cmd = self._command(args, context)
        logger.debug("Running %s", " ".join(cmd))
        try:
            proc = subprocess.run(
                cmd,
                capture_output=True,
                timeout=self.timeout,
                env=self._env(),
                check=False,
            )
        except FileNotFoundError as e:
            raise KubectlError(None, f"{self.binary}: executable missing from PATH") from e
        except subprocess.TimeoutExpired as e:
            if keep_partial:
                return self._check_size(e.stdout or b"", args)
            raise KubectlError(None, f"{self.binary} timed out after {self.timeout}s") from e

        stdout = self._check_size(proc.stdout, args)
        if proc.returncode != 0:
            stderr = proc.stderr.decode("utf-8", errors="replace")
            raise KubectlError(proc.returncode, (stderr or stdout).strip())
        return stdout

    # ------------------------------------------------------------------ #
    # Reads                                                              #
    # ------------------------------------------------------------------ #

    def read(self, kind: str, name: str, namespace: str, path: str, context: str | None = None) -> str:
        """Return the jsonpath projection `path` of a single object."""
        args = ["-n", namespace, "get", kind, name, "-o", f"jsonpath={path}"]
        return self._run(args, context).strip()

    def list_names(self, collection: str, selector: str, namespace: str, context: str | None = None) -> List[str]:
        """Names of the objects in `collection` matching `selector`, in listing order."""
        args = ["-n", namespace, "get", collection, f"--selector={selector}", "-o", NAMES_JSONPATH]
        return self._run(args, context).split()

    def logs(self, pod_name: str, namespace: str, options: LogOptions, context: str | None = None) -> str:
        if options.follow:
            logger.warning(
                "follow requested for pod %s; running a single pass bounded by the %ss timeout",
                pod_name,
                self.timeout,
            )
        args = ["-n", namespace, "logs", pod_name] + options.to_args()
        return self._run(args, context, keep_partial=options.follow)
