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

"""
Shared pytest fixtures for kube-virsh tests.

This module provides:
- make_pod: real ``kubernetes.client.V1Pod`` models with optional fields left unset
- FakeChannel: the subset of the kubernetes ``WSClient`` the executor drives
- FakeClusterClient: scripted pods, watch events and exec outputs per pod
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from datetime import datetime, timezone
from typing import Any

import pytest
from kubernetes import client as k8s

from kube_virsh.constants import EVENT_ADDED, EVENT_MODIFIED
from kube_virsh.errors import ClusterQueryError
from kube_virsh.models import WatchEvent

STARTED = datetime(2026, 10, 1, 12, 0, tzinfo=timezone.utc)


# =============================================================================
# Pod factory
# =============================================================================

def _container_state(state: str | None, reason: str | None) -> k8s.V1ContainerState:
    if state == "running":
        return k8s.V1ContainerState(running=k8s.V1ContainerStateRunning(started_at=STARTED))
    if state == "terminated":
        return k8s.V1ContainerState(terminated=k8s.V1ContainerStateTerminated(exit_code=0, reason=reason))
    if state == "waiting":
        return k8s.V1ContainerState(waiting=k8s.V1ContainerStateWaiting(reason=reason))
    return k8s.V1ContainerState()


def make_pod(
    namespace: str,
    name: str,
    *,
    states: tuple[str | None, ...] = ("running",),
    reason: str | None = None,
    node: str | None = "node-a",
    arch: str | None = "amd64",
    start_time: datetime | None = STARTED,
    pod_phase: str | None = None,
) -> k8s.V1Pod:
    """Build a V1Pod with one container status per entry of *states*.

    ``states=()`` produces a pod without container statuses (not yet scheduled).
    """
    container_statuses = [
        k8s.V1ContainerStatus(
            name=f"c{i}",
            image="registry/vm:latest",
            image_id="",
            ready=state == "running",
            restart_count=0,
            state=_container_state(state, reason),
        )
        for i, state in enumerate(states)
    ] or None
    return k8s.V1Pod(
        metadata=k8s.V1ObjectMeta(namespace=namespace, name=name),
        spec=k8s.V1PodSpec(
            containers=[],
            node_name=node,
            node_selector={"kubernetes.io/arch": arch} if arch else None,
        ),
        status=k8s.V1PodStatus(
            phase=pod_phase or ("Running" if "running" in states else "Pending"),
            start_time=start_time,
            container_statuses=container_statuses,
        ),
    )


def running_event(name: str, event_type: str = EVENT_ADDED) -> WatchEvent:
    return WatchEvent(type=event_type, name=name, phase="Running")


def pending_event(name: str, event_type: str = EVENT_MODIFIED) -> WatchEvent:
    return WatchEvent(type=event_type, name=name, phase="Pending")


# =============================================================================
# Exec channel and cluster fakes
# =============================================================================

class FakeChannel:
    """Delivers one scripted stdout chunk per ``update()`` call, then closes.

    If *error* is set, ``update()`` raises it once the chunks are exhausted.
    """

    def __init__(self, chunks: list[bytes | str] | tuple = (), error: Exception | None = None) -> None:
        self._pending = list(chunks)
        self._buffer: list[Any] = []
        self._error = error
        self._open = True
        self.closed = False

    def is_open(self) -> bool:
        return self._open

    def update(self, timeout: float = 0) -> None:
        if self._pending:
            self._buffer.append(self._pending.pop(0))
        elif self._error is not None:
            raise self._error
        if not self._pending and self._error is None:
            self._open = False

    def peek_stdout(self, timeout: float = 0) -> bool:
        return bool(self._buffer)

    def read_stdout(self, timeout: float | None = None) -> bytes | str:
        data = self._buffer
        self._buffer = []
        if all(isinstance(chunk, str) for chunk in data):
            return "".join(data)
        return b"".join(data)

    def close(self) -> None:
        self.closed = True
        self._open = False


class FakeClusterClient:
    """In-memory stand-in for ``kube_virsh.cluster.ClusterClient``.

    Attributes:
        pods: Pods returned by ``list_pods``.
        watch_scripts: Per (namespace, name) list of WatchEvents, or an
            exception raised when the watch is read. Defaults to a single
            ADDED/Running event.
        exec_outputs: Per (namespace, name) list of stdout chunks, a
            prepared FakeChannel, or an exception raised by ``open_exec``.
    """

    def __init__(self, pods: list | tuple = (), *, list_error: Exception | None = None) -> None:
        self.pods = list(pods)
        self.list_error = list_error
        self.watch_scripts: dict[tuple[str, str], Any] = {}
        self.exec_outputs: dict[tuple[str, str], Any] = {}
        self.watch_calls: list[tuple[str, str, int]] = []
        self.exec_calls: list[tuple[str, str, list[str]]] = []
        self._lock = threading.Lock()

    def list_pods(self) -> list:
        if self.list_error is not None:
            raise self.list_error
        return list(self.pods)

    def watch_pod(self, namespace: str, name: str, timeout_seconds: int) -> Iterator[WatchEvent]:
        with self._lock:
            self.watch_calls.append((namespace, name, timeout_seconds))
        script = self.watch_scripts.get((namespace, name), [running_event(name)])
        return self._events(script)

    @staticmethod
    def _events(script: Any) -> Iterator[WatchEvent]:
        if isinstance(script, Exception):
            raise script
        yield from script

    def open_exec(self, namespace: str, name: str, command: list[str]) -> FakeChannel:
        with self._lock:
            self.exec_calls.append((namespace, name, command))
        scripted = self.exec_outputs.get((namespace, name), [])
        if isinstance(scripted, Exception):
            raise scripted
        if isinstance(scripted, FakeChannel):
            return scripted
        return FakeChannel(scripted)


def virsh_line(domain: str, state: str, dom_id: str = "1") -> bytes:
    return f" {dom_id:<5}{domain:<25}{state}\n".encode()


@pytest.fixture
def fake_cluster() -> FakeClusterClient:
    return FakeClusterClient()


@pytest.fixture
def watch_failure() -> ClusterQueryError:
    return ClusterQueryError("watch refused")
