"""Checklist descriptors and the fixed message text they log.

Each existence probe is a :class:`ResourceCheck`: what to query, and the
line to log for either outcome. The service layer executes them against a
cluster client; nothing here touches the cluster.
"""

from __future__ import annotations

from dataclasses import dataclass

from kbcheck.domain.inputs import CheckInputs

MASK_EDGE = 4

SECRET_NAME_PATH = "{.secrets[0].name}"
TOKEN_PATH = "{.data.token}"
CA_PATH = r"{.data.ca\.crt}"

# The selector input is always matched against this label key.
POD_LABEL_KEY = "app"


@dataclass(frozen=True)
class ResourceCheck:
    """A single ``kubectl get`` existence probe."""

    key: str
    kind: str
    name: str
    namespace: str | None
    heading: str
    present: str
    absent: str

    def message(self, ok: bool) -> str:
        return self.present if ok else self.absent


def resource_checks(inputs: CheckInputs) -> tuple[ResourceCheck, ...]:
    """The four existence probes, in checklist order."""
    ns = inputs.namespace
    return (
        ResourceCheck(
            key="namespace",
            kind="namespace",
            name=ns,
            namespace=None,
            heading="Checking namespace...",
            present=f"Namespace {ns} exists.",
            absent=f"Namespace {ns} does not exist.",
        ),
        ResourceCheck(
            key="service_account",
            kind="serviceaccount",
            name=inputs.service_account,
            namespace=ns,
            heading="Checking service account...",
            present=f"Service account {inputs.service_account} exists in namespace {ns}.",
            absent=f"Service account {inputs.service_account} does not exist in namespace {ns}.",
        ),
        ResourceCheck(
            key="role",
            kind="role",
            name=inputs.role,
            namespace=ns,
            heading="Checking role...",
            present=f"Role {inputs.role} exists in namespace {ns}.",
            absent=f"Role {inputs.role} does not exist in namespace {ns}.",
        ),
        ResourceCheck(
            key="role_binding",
            kind="rolebinding",
            name=inputs.role_binding,
            namespace=ns,
            heading="Checking role binding...",
            present=f"Role binding {inputs.role_binding} exists in namespace {ns}.",
            absent=f"Role binding {inputs.role_binding} does not exist in namespace {ns}.",
        ),
    )


def mask_secret(value: str) -> str:
    """Show only the first and last four characters of *value*.

    Values shorter than four characters keep their head and lose the tail,
    so nothing is ever shown twice.
    """
    tail = value[-MASK_EDGE:] if len(value) >= MASK_EDGE else ""
    return f"{value[:MASK_EDGE]}...{tail}"


def pod_selector(inputs: CheckInputs) -> str:
    return f"{POD_LABEL_KEY}={inputs.label_selector}"


def pod_messages(inputs: CheckInputs) -> tuple[str, str]:
    """(found, not found) lines for the label-selector pod query."""
    selector = pod_selector(inputs)
    return (
        f"Pods with label {selector} found in namespace {inputs.namespace}.",
        f"No pods with label {selector} found in namespace {inputs.namespace}.",
    )


def url_messages(inputs: CheckInputs) -> tuple[str, str]:
    """(accessible, not accessible) lines for the cluster URL probe."""
    return (
        f"Cluster URL {inputs.cluster_url} is accessible.",
        f"Cluster URL {inputs.cluster_url} is not accessible.",
    )


def no_secret_message(inputs: CheckInputs) -> str:
    return f"No secret associated with service account {inputs.service_account} found."


def annotation_lines(inputs: CheckInputs) -> list[str]:
    """Advisory ``catalog-info.yaml`` annotation block.

    Purely informational: nothing checks that these annotations exist.
    """
    return [
        "  annotations:",
        f"    backstage.io/kubernetes-id: {inputs.k8s_id}",
        f"    backstage.io/kubernetes-namespace: {inputs.namespace}",
        f'    backstage.io/kubernetes-label-selector: "{inputs.label_selector}"',
    ]
