"""Shared pytest fixtures for kbcheck tests."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest
from click.testing import CliRunner
from fakes import FakeCluster

from kbcheck.domain.inputs import CheckInputs
from kbcheck.infrastructure.logbook import Logbook

FIXED_NOW = datetime(2024, 5, 17, 9, 30, 0)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def inputs() -> CheckInputs:
    return CheckInputs(
        namespace="ns1",
        service_account="sa1",
        role="r1",
        role_binding="rb1",
        cluster_url="https://example.invalid",
        cluster_name="c1",
        k8s_id="id1",
        label_selector="sel1",
    )


@pytest.fixture
def healthy_cluster() -> FakeCluster:
    """ns1/sa1/r1/rb1 all exist; sa1 has no secrets; one pod matches app=sel1."""
    return FakeCluster(
        objects={
            ("namespace", None, "ns1"),
            ("serviceaccount", "ns1", "sa1"),
            ("role", "ns1", "r1"),
            ("rolebinding", "ns1", "rb1"),
        },
        pods={"app=sel1": ["pod/web-0"]},
    )


@pytest.fixture
def logbook(tmp_path: Path) -> Logbook:
    """Logbook with a frozen clock writing to a temp file."""
    return Logbook(tmp_path / "check.log", clock=lambda: FIXED_NOW)


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run in an empty temp dir with no config discovery or env overrides."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("KBCHECK_CONFIG", raising=False)
