"""Read-only cluster access through the ``kubectl`` binary.

Every call is a single blocking ``kubectl get``. A non-zero exit, a missing
binary, and an unreachable API server are indistinguishable to callers:
all of them read as "not there".
"""

from __future__ import annotations

import logging
import subprocess
from typing import Protocol

from kbcheck.config.models import KubectlConfig

logger = logging.getLogger(__name__)


class ClusterClient(Protocol):
    """The cluster capability the checklist needs. Tests substitute fakes."""

    def exists(self, kind: str, name: str, namespace: str | None = None) -> bool: ...

    def field(self, kind: str, name: str, namespace: str, jsonpath: str) -> str: ...

    def select(self, kind: str, namespace: str, selector: str) -> list[str] | None: ...


class KubectlClient:
    """ClusterClient backed by ``subprocess.run([kubectl, "get", ...])``."""

    def __init__(self, config: KubectlConfig | None = None) -> None:
        self._config = config or KubectlConfig()

    def _base_command(self) -> list[str]:
        cmd = [self._config.binary]
        if self._config.kubeconfig:
            cmd.extend(["--kubeconfig", self._config.kubeconfig])
        if self._config.context:
            cmd.extend(["--context", self._config.context])
        return cmd

    def _get(self, args: list[str]) -> subprocess.CompletedProcess[str] | None:
        cmd = [*self._base_command(), "get", *args]
        try:
            proc = subprocess.run(cmd, capture_output=True, text=True, check=False)
        except OSError as exc:
            logger.debug("kubectl could not be started: %s", exc)
            return None
        if proc.returncode != 0:
            logger.debug(
                "kubectl get %s exited %d: %s",
                " ".join(args),
                proc.returncode,
                proc.stderr.strip(),
            )
        return proc

    def exists(self, kind: str, name: str, namespace: str | None = None) -> bool:
        args = [kind, name]
        if namespace is not None:
            args.extend(["--namespace", namespace])
        proc = self._get(args)
        return proc is not None and proc.returncode == 0

    def field(self, kind: str, name: str, namespace: str, jsonpath: str) -> str:
        """Extract one field via ``-o jsonpath``; empty string on any failure."""
        proc = self._get([kind, name, "--namespace", namespace, "-o", f"jsonpath={jsonpath}"])
        if proc is None or proc.returncode != 0:
            return ""
        return proc.stdout.strip()

    def select(self, kind: str, namespace: str, selector: str) -> list[str] | None:
        """Names of objects matching *selector*, or None if the query failed.

        kubectl exits 0 with no output when nothing matches, so an empty
        list and None mean different things.
        """
        proc = self._get([kind, "-n", namespace, "-l", selector, "-o", "name"])
        if proc is None or proc.returncode != 0:
            return None
        return [line for line in proc.stdout.splitlines() if line.strip()]
