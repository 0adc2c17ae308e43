# /*
# Copyright 2026 The kube-virsh Authors.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# */

"""Tests for best-effort command dispatch."""

import pytest

from conftest import FakeClusterClient, make_pod, pending_event
from kube_virsh.dispatcher import dispatch
from kube_virsh.errors import ClusterQueryError, ExecError
from kube_virsh.models import CommandResult, WorkloadKey

OK = WorkloadKey("tenant-a", "ecs-node7-0")
BROKEN = WorkloadKey("tenant-b", "ecs-node7-1")
XML = "<domain type='kvm'>\n  <name>ecs-node7</name>\n</domain>\n"


@pytest.fixture
def node7_cluster():
    cluster = FakeClusterClient([
        make_pod(OK.namespace, OK.name),
        make_pod(BROKEN.namespace, BROKEN.name),
        make_pod("tenant-a", "ecs-node8-0"),
        make_pod("default", "ecs-node7-2"),
    ])
    cluster.exec_outputs[OK] = [XML.encode()]
    cluster.exec_outputs[BROKEN] = ExecError("attach refused")
    return cluster


def test_one_failing_match_does_not_abort_the_run(node7_cluster, capsys):
    results = dispatch(node7_cluster, "tenant-", "node7", "getxml")

    assert results == [CommandResult(OK.namespace, OK.name, XML)]
    assert capsys.readouterr().out == XML
    assert {call[:2] for call in node7_cluster.exec_calls} == {tuple(OK), tuple(BROKEN)}


def test_translated_command_is_run_through_shell(node7_cluster):
    dispatch(node7_cluster, "tenant-", "node7", "getxml", shell="sh")

    commands = {call[2][-1] for call in node7_cluster.exec_calls}
    assert commands == {"virsh dumpxml ecs-node7 --inactive"}
    assert all(call[2][:2] == ["sh", "-c"] for call in node7_cluster.exec_calls)


def test_readiness_failure_skips_target(node7_cluster, capsys):
    node7_cluster.watch_scripts[OK] = [pending_event(OK.name)]

    results = dispatch(node7_cluster, "tenant-", "node7", "logs")

    assert results == []
    assert capsys.readouterr().out == ""
    assert tuple(OK) not in {call[:2] for call in node7_cluster.exec_calls}


def test_untranslatable_target_is_a_no_op(capsys):
    cluster = FakeClusterClient([make_pod("tenant-a", "node7")])

    assert dispatch(cluster, "tenant-", "node7", "getxml") == []
    assert cluster.exec_calls == []
    assert cluster.watch_calls == []
    assert capsys.readouterr().out == ""


def test_unknown_command_is_a_no_op(node7_cluster):
    assert dispatch(node7_cluster, "tenant-", "node7", "reboot") == []
    assert node7_cluster.exec_calls == []


def test_empty_output_is_not_printed(capsys):
    cluster = FakeClusterClient([make_pod("tenant-a", "ecs-node7-0")])

    assert dispatch(cluster, "tenant-", "node7", "logs") == []
    assert capsys.readouterr().out == ""


def test_no_matches():
    assert dispatch(FakeClusterClient(), "tenant-", "node7", "getxml") == []


def test_list_failure_propagates():
    cluster = FakeClusterClient(list_error=ClusterQueryError("forbidden"))

    with pytest.raises(ClusterQueryError):
        dispatch(cluster, "tenant-", "node7", "getxml")
