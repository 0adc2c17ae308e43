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

"""Watch-based readiness gate run before attaching to a pod."""

from __future__ import annotations

from contextlib import closing
from enum import Enum
from typing import Any

from kube_virsh import logger
from kube_virsh.constants import (
    DEFAULT_READY_TIMEOUT_SECONDS,
    EVENT_ADDED,
    EVENT_MODIFIED,
    POD_PHASE_RUNNING,
)
from kube_virsh.errors import ReadinessTimeoutError
from kube_virsh.models import WatchEvent


class GateState(Enum):
    AWAITING_READY = "AwaitingReady"
    READY = "Ready"


class ReadinessGate:
    """Two-state machine fed with watch events for one pod.

    ``ADDED`` (pod already running when the watch opened) and ``MODIFIED``
    events whose phase is ``Running`` move the gate to READY. Everything
    else is logged and ignored. READY is terminal.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self.state = GateState.AWAITING_READY

    @property
    def ready(self) -> bool:
        return self.state is GateState.READY

    def observe(self, event: WatchEvent) -> GateState:
        if self.ready:
            return self.state
        if event.type in (EVENT_ADDED, EVENT_MODIFIED) and event.phase == POD_PHASE_RUNNING:
            self.state = GateState.READY
        else:
            logger.debug("Ignoring %s event for %s (phase=%s)", event.type, self.name, event.phase)
        return self.state


def await_ready(
    cluster: Any,
    namespace: str,
    name: str,
    timeout_seconds: int = DEFAULT_READY_TIMEOUT_SECONDS,
) -> None:
    """Block until the pod is observed Running or the watch window closes.

    The watch is closed as soon as the gate opens.

    Args:
        cluster: Shared ClusterClient handle.
        namespace: Pod namespace.
        name: Pod name.
        timeout_seconds: Server-side timeout of the watch.

    Raises:
        ReadinessTimeoutError: If the stream ended without a Running event.
        ClusterQueryError: If the watch call failed.
    """
    gate = ReadinessGate(name)
    with closing(cluster.watch_pod(namespace, name, timeout_seconds)) as events:
        for event in events:
            if gate.observe(event) is GateState.READY:
                return
    raise ReadinessTimeoutError(f"Pod {namespace}/{name} not Running within {timeout_seconds}s")
