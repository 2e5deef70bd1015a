"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, kbcheck.toml only contains
overrides. With no file at all the checklist runs with
``kubectl`` on PATH, an insecure HTTP probe with no timeout, and
``check_k8s_backstage.log`` in the working directory.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

DEFAULT_LOG_FILE = "check_k8s_backstage.log"


# --- kbcheck.toml sections ---


class KubectlConfig(BaseModel):
    """[kubectl] section."""

    model_config = {"frozen": True}

    binary: str = "kubectl"
    context: str | None = None
    kubeconfig: str | None = None


class HttpConfig(BaseModel):
    """[http] section.

    ``timeout_seconds = None`` means the probe may block indefinitely.
    """

    model_config = {"frozen": True}

    timeout_seconds: float | None = Field(default=None, gt=0)
    verify: bool = False


class LogConfig(BaseModel):
    """[log] section."""

    model_config = {"frozen": True}

    file: str = DEFAULT_LOG_FILE


class ChecksConfig(BaseModel):
    """[checks] section."""

    model_config = {"frozen": True}

    # False: the pod query passes whenever kubectl succeeds, even with zero
    # matching pods. True: at least one pod must match the selector.
    require_pod_match: bool = False
