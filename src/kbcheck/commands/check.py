"""Command: run the Backstage/Kubernetes readiness checklist."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from kbcheck.commands._base import KbCommand

if TYPE_CHECKING:
    from kbcheck.commands._context import AppContext


@click.command(
    cls=KbCommand,
    examples="""\
  kbcheck check
  kbcheck check --namespace backstage --service-account backstage-reader
  kbcheck --json --no-interact check --namespace ns1 --service-account sa1 \\
      --role r1 --role-binding rb1 --cluster-url https://k8s.example.com \\
      --cluster-name prod --k8s-id my-service --label-selector my-service""",
)
@click.option("--namespace", default=None, help="Namespace holding the Backstage resources.")
@click.option("--service-account", default=None, help="Service account Backstage uses.")
@click.option("--role", default=None, help="Role granted to the service account.")
@click.option("--role-binding", default=None, help="Role binding for the service account.")
@click.option("--cluster-url", default=None, help="Kubernetes API server URL.")
@click.option("--cluster-name", default=None, help="Cluster name as configured in Backstage.")
@click.option("--k8s-id", default=None, help="Value for backstage.io/kubernetes-id.")
@click.option("--label-selector", default=None, help="Value matched against the app label.")
@click.pass_obj
def check(app: AppContext, **supplied: str | None) -> None:
    """Prompt for any missing inputs, then run every check and summarize.

    Exits 0 once the checklist completes, however many checks fail.
    Exits 1 as soon as a required input is empty.
    """
    from kbcheck.domain.inputs import FIELDS, CheckInputs

    svc = app.checklist()
    svc.start()

    values: dict[str, str] = {}
    for field in FIELDS:
        value = supplied.get(field.name)
        if value is None and not app.settings.no_interact:
            value = click.prompt(
                field.prompt,
                default="",
                show_default=False,
                err=not app.mirror,
            )
        values[field.name] = (value or "").strip()
        if not values[field.name]:
            app.emit(svc.missing_input(field))

    app.emit(svc.run(CheckInputs.from_values(values)))
