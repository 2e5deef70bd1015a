"""Operator inputs for a checklist run.

Eight free-text values, each required to be non-empty. Nothing else is
validated: no trimming, no coercion, no cross-field rules.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from pydantic import BaseModel


@dataclass(frozen=True)
class InputField:
    """One operator input: attribute name, label for messages, prompt text."""

    name: str
    label: str
    prompt: str


# Prompt order is the validation order.
FIELDS: tuple[InputField, ...] = (
    InputField("namespace", "namespace", "Enter the namespace"),
    InputField("service_account", "service account name", "Enter the service account name"),
    InputField("role", "role name", "Enter the role name"),
    InputField("role_binding", "role binding name", "Enter the role binding name"),
    InputField("cluster_url", "cluster URL", "Enter the cluster URL"),
    InputField("cluster_name", "cluster name", "Enter the cluster name"),
    InputField("k8s_id", "Backstage Kubernetes ID", "Enter the Backstage Kubernetes ID"),
    InputField(
        "label_selector",
        "Backstage label selector",
        "Enter the Backstage label selector",
    ),
)

FIELDS_BY_NAME: dict[str, InputField] = {f.name: f for f in FIELDS}


class MissingInputError(ValueError):
    """Raised when a required input is empty."""

    def __init__(self, field: InputField) -> None:
        super().__init__(f"Missing input for {field.label}.")
        self.field = field


def find_missing(values: Mapping[str, str | None]) -> InputField | None:
    """Return the first field (in prompt order) whose value is empty."""
    for field in FIELDS:
        if not values.get(field.name):
            return field
    return None


class CheckInputs(BaseModel):
    """Validated operator inputs, frozen for the duration of a run."""

    model_config = {"frozen": True}

    namespace: str
    service_account: str
    role: str
    role_binding: str
    cluster_url: str
    cluster_name: str
    k8s_id: str
    label_selector: str

    @classmethod
    def from_values(cls, values: Mapping[str, str | None]) -> CheckInputs:
        """Build inputs from raw values.

        Raises:
            MissingInputError: naming the first empty field.
        """
        missing = find_missing(values)
        if missing is not None:
            raise MissingInputError(missing)
        return cls(**{f.name: values[f.name] for f in FIELDS})
