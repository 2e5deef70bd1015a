"""Tests for KubectlClient — subprocess calls are patched out."""

from __future__ import annotations

import subprocess
from unittest.mock import MagicMock, patch

from kbcheck.config.models import KubectlConfig
from kbcheck.infrastructure.kubectl import KubectlClient


def _proc(
    returncode: int = 0, stdout: str = "", stderr: str = ""
) -> subprocess.CompletedProcess[str]:
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


class TestExists:
    def test_success_means_exists(self) -> None:
        with patch("kbcheck.infrastructure.kubectl.subprocess.run", return_value=_proc()) as run:
            assert KubectlClient().exists("namespace", "ns1") is True
        cmd = run.call_args.args[0]
        assert cmd == ["kubectl", "get", "namespace", "ns1"]

    def test_namespaced_query(self) -> None:
        with patch("kbcheck.infrastructure.kubectl.subprocess.run", return_value=_proc()) as run:
            KubectlClient().exists("role", "r1", "ns1")
        assert run.call_args.args[0] == ["kubectl", "get", "role", "r1", "--namespace", "ns1"]

    def test_not_found_and_forbidden_both_read_as_absent(self) -> None:
        for stderr in ('Error from server (NotFound): roles "r1" not found', "Forbidden"):
            with patch(
                "kbcheck.infrastructure.kubectl.subprocess.run",
                return_value=_proc(returncode=1, stderr=stderr),
            ):
                assert KubectlClient().exists("role", "r1", "ns1") is False

    def test_missing_binary_reads_as_absent(self) -> None:
        with patch(
            "kbcheck.infrastructure.kubectl.subprocess.run",
            side_effect=FileNotFoundError("kubectl"),
        ):
            assert KubectlClient().exists("namespace", "ns1") is False

    def test_context_and_kubeconfig_pass_through(self) -> None:
        config = KubectlConfig(binary="/usr/local/bin/kubectl", context="prod", kubeconfig="/k")
        with patch("kbcheck.infrastructure.kubectl.subprocess.run", return_value=_proc()) as run:
            KubectlClient(config).exists("namespace", "ns1")
        assert run.call_args.args[0] == [
            "/usr/local/bin/kubectl",
            "--kubeconfig",
            "/k",
            "--context",
            "prod",
            "get",
            "namespace",
            "ns1",
        ]

    def test_output_is_captured_without_check(self) -> None:
        with patch("kbcheck.infrastructure.kubectl.subprocess.run", return_value=_proc()) as run:
            KubectlClient().exists("namespace", "ns1")
        kwargs = run.call_args.kwargs
        assert kwargs["capture_output"] is True
        assert kwargs["check"] is False


class TestField:
    def test_jsonpath_value(self) -> None:
        with patch(
            "kbcheck.infrastructure.kubectl.subprocess.run",
            return_value=_proc(stdout="sa1-token-abcde"),
        ) as run:
            value = KubectlClient().field("serviceaccount", "sa1", "ns1", "{.secrets[0].name}")
        assert value == "sa1-token-abcde"
        assert run.call_args.args[0][-2:] == ["-o", "jsonpath={.secrets[0].name}"]

    def test_escaped_key_is_passed_verbatim(self) -> None:
        with patch("kbcheck.infrastructure.kubectl.subprocess.run", return_value=_proc()) as run:
            KubectlClient().field("secret", "s1", "ns1", r"{.data.ca\.crt}")
        assert run.call_args.args[0][-1] == r"jsonpath={.data.ca\.crt}"

    def test_failure_returns_empty(self) -> None:
        with patch(
            "kbcheck.infrastructure.kubectl.subprocess.run",
            return_value=_proc(returncode=1, stdout="partial"),
        ):
            assert KubectlClient().field("secret", "s1", "ns1", "{.data.token}") == ""


class TestSelect:
    def test_names_returned(self) -> None:
        run = MagicMock(return_value=_proc(stdout="pod/web-0\npod/web-1\n"))
        with patch("kbcheck.infrastructure.kubectl.subprocess.run", run):
            names = KubectlClient().select("pods", "ns1", "app=sel1")
        assert names == ["pod/web-0", "pod/web-1"]
        assert run.call_args.args[0] == [
            "kubectl", "get", "pods", "-n", "ns1", "-l", "app=sel1", "-o", "name",
        ]

    def test_no_matches_is_empty_list(self) -> None:
        with patch("kbcheck.infrastructure.kubectl.subprocess.run", return_value=_proc()):
            assert KubectlClient().select("pods", "ns1", "app=sel1") == []

    def test_failed_query_is_none(self) -> None:
        with patch(
            "kbcheck.infrastructure.kubectl.subprocess.run",
            return_value=_proc(returncode=1, stderr="namespaces \"ns1\" not found"),
        ):
            assert KubectlClient().select("pods", "ns1", "app=sel1") is None
