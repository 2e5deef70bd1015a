"""ChecklistService — the Backstage/Kubernetes readiness checklist.

One strictly linear pass: resource existence, service account credentials,
cluster URL reachability, annotation advisory, label-selector pod query,
then a summary that re-runs every probe to list what failed. Only a
missing input aborts; every failed check is logged and the run continues.
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import structlog

from kbcheck.config.models import ChecksConfig
from kbcheck.domain.checks import (
    CA_PATH,
    SECRET_NAME_PATH,
    TOKEN_PATH,
    ResourceCheck,
    annotation_lines,
    mask_secret,
    no_secret_message,
    pod_messages,
    pod_selector,
    resource_checks,
    url_messages,
)
from kbcheck.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from kbcheck.domain.inputs import CheckInputs, InputField
    from kbcheck.infrastructure.http import HttpProbe
    from kbcheck.infrastructure.kubectl import ClusterClient
    from kbcheck.infrastructure.logbook import Logbook

log = structlog.get_logger(__name__)

OP = "checklist"

TOKEN_OK = "Service account token retrieved successfully: {}"
TOKEN_FAILED = "Failed to retrieve service account token."
CA_OK = "CA data retrieved successfully: {}"
CA_FAILED = "Failed to retrieve CA data."


@dataclass
class Credentials:
    """First-pass credential lookups. Empty strings mean "not retrieved"."""

    secret_name: str = ""
    token: str = ""
    ca_data: str = ""


def decode_secret_field(raw: str) -> str:
    """Base64-decode a secret data field; anything undecodable reads as empty."""
    if not raw:
        return ""
    try:
        decoded = base64.b64decode(raw, validate=True)
    except (binascii.Error, ValueError):
        log.debug("secret.decode_failed", length=len(raw))
        return ""
    # Shell command substitution drops trailing newlines; PEM data ends in one.
    return decoded.decode("utf-8", errors="replace").rstrip("\n")


class ChecklistService:
    """Runs the checklist against a cluster client and an HTTP probe.

    Every line goes through the :class:`Logbook`, which both appends to the
    log file and mirrors to the terminal.
    """

    def __init__(
        self,
        cluster: ClusterClient,
        http: HttpProbe,
        logbook: Logbook,
        *,
        checks: ChecksConfig | None = None,
    ) -> None:
        self._cluster = cluster
        self._http = http
        self._logbook = logbook
        self._checks = checks or ChecksConfig()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Log the line that precedes input collection."""
        self._write("Prompting user for inputs...")

    def missing_input(self, field: InputField) -> ServiceResult:
        """Log the fatal missing-input line and return the aborted result."""
        message = f"Missing input for {field.label}."
        self._write(f"Error: {message}")
        return ServiceResult(
            ok=False,
            op=OP,
            error=ServiceError(
                code="MISSING_INPUT",
                message=message,
                detail={"field": field.name, "label": field.label},
            ),
            meta={"log_file": str(self._logbook.path)},
        )

    def run(self, inputs: CheckInputs) -> ServiceResult:
        """Run the full checklist. Always ``ok`` once inputs are valid."""
        results: list[dict[str, Any]] = []

        for check in resource_checks(inputs):
            self._write(check.heading)
            ok = self._probe_resource(check)
            self._write(check.message(ok))
            results.append({"key": check.key, "ok": ok, "message": check.message(ok)})

        creds = self._retrieve_credentials(inputs, results)

        self._write("Checking cluster URL accessibility...")
        url_ok = self._probe_url(inputs)
        accessible, inaccessible = url_messages(inputs)
        self._write(accessible if url_ok else inaccessible)
        results.append(
            {"key": "cluster_url", "ok": url_ok, "message": accessible if url_ok else inaccessible}
        )

        self._write("Checking Backstage catalog-info.yaml annotations...")
        self._write(
            "Ensure the following annotations are correctly applied in your catalog-info.yaml:"
        )
        for line in annotation_lines(inputs):
            self._write(line)

        self._write("Checking Kubernetes resources with label selector...")
        pods_ok = self._probe_pods(inputs)
        found, not_found = pod_messages(inputs)
        self._write(found if pods_ok else not_found)
        results.append({"key": "pods", "ok": pods_ok, "message": found if pods_ok else not_found})

        failures = self._summarize(inputs, creds)

        self._write(
            "Please address any issues identified above and re-run the script "
            "to verify the configuration."
        )
        self._write(f"Script execution complete. Logs have been saved to {self._logbook.path}.")

        log.info("checklist.complete", failures=len(failures))
        return ServiceResult(
            ok=True,
            op=OP,
            data={
                "inputs": inputs.model_dump(),
                "checks": results,
                "secret_name": creds.secret_name or None,
                "token": mask_secret(creds.token) if creds.token else None,
                "ca_data": mask_secret(creds.ca_data) if creds.ca_data else None,
                "failures": failures,
                "failure_count": len(failures),
                "log_file": str(self._logbook.path),
            },
        )

    # ------------------------------------------------------------------
    # Probes
    # ------------------------------------------------------------------

    def _probe_resource(self, check: ResourceCheck) -> bool:
        ok = self._cluster.exists(check.kind, check.name, check.namespace)
        log.debug("probe.resource", kind=check.kind, name=check.name, ok=ok)
        return ok

    def _probe_url(self, inputs: CheckInputs) -> bool:
        ok = self._http.reachable(inputs.cluster_url)
        log.debug("probe.url", url=inputs.cluster_url, ok=ok)
        return ok

    def _probe_pods(self, inputs: CheckInputs) -> bool:
        names = self._cluster.select("pods", inputs.namespace, pod_selector(inputs))
        log.debug("probe.pods", selector=pod_selector(inputs), matches=names)
        if names is None:
            return False
        return bool(names) or not self._checks.require_pod_match

    def _retrieve_credentials(
        self, inputs: CheckInputs, results: list[dict[str, Any]]
    ) -> Credentials:
        """Look up the first secret of the service account and its two fields.

        Token and CA data are fetched and decoded independently; either may
        be missing without affecting the other.
        """
        self._write("Checking service account token...")
        creds = Credentials(
            secret_name=self._cluster.field(
                "serviceaccount", inputs.service_account, inputs.namespace, SECRET_NAME_PATH
            )
        )
        if not creds.secret_name:
            message = no_secret_message(inputs)
            self._write(message)
            results.append({"key": "secret", "ok": False, "message": message})
            return creds

        message = (
            f"Secret {creds.secret_name} associated with service account "
            f"{inputs.service_account} found."
        )
        self._write(message)
        results.append({"key": "secret", "ok": True, "message": message})

        creds.token = self._secret_field(creds.secret_name, inputs.namespace, TOKEN_PATH)
        message = TOKEN_OK.format(mask_secret(creds.token)) if creds.token else TOKEN_FAILED
        self._write(message)
        results.append({"key": "token", "ok": bool(creds.token), "message": message})

        creds.ca_data = self._secret_field(creds.secret_name, inputs.namespace, CA_PATH)
        message = CA_OK.format(mask_secret(creds.ca_data)) if creds.ca_data else CA_FAILED
        self._write(message)
        results.append({"key": "ca_data", "ok": bool(creds.ca_data), "message": message})
        return creds

    def _secret_field(self, secret_name: str, namespace: str, jsonpath: str) -> str:
        return decode_secret_field(self._cluster.field("secret", secret_name, namespace, jsonpath))

    # ------------------------------------------------------------------
    # Summary
    # ------------------------------------------------------------------

    def _summarize(self, inputs: CheckInputs, creds: Credentials) -> list[str]:
        """Re-run the cluster and HTTP probes and log one line per failure.

        Nothing from the first pass is reused except the credential lookups,
        so the summary reflects cluster state at the time it runs.
        """
        self._write("Summary of checks:")
        failures: list[str] = []

        for check in resource_checks(inputs):
            if not self._probe_resource(check):
                failures.append(check.absent)

        if not creds.secret_name:
            failures.append(no_secret_message(inputs))
        else:
            if not creds.token:
                failures.append(TOKEN_FAILED)
            if not creds.ca_data:
                failures.append(CA_FAILED)

        if not self._probe_url(inputs):
            failures.append(url_messages(inputs)[1])

        if not self._probe_pods(inputs):
            failures.append(pod_messages(inputs)[1])

        for failure in failures:
            self._write(f"- {failure}")
        return failures

    def _write(self, message: str) -> None:
        self._logbook.write(message)
