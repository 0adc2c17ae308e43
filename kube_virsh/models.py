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

"""Records built from one cluster snapshot."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import NamedTuple


class Phase(str, Enum):
    """Coarse lifecycle state derived from container states."""

    PENDING = "Pending"
    RUNNING = "Running"
    TERMINATED = "Terminated"
    UNKNOWN = "Unknown"


class WorkloadKey(NamedTuple):
    """Cluster-unique pod identity."""

    namespace: str
    name: str


@dataclass
class WorkloadRecord:
    """One matched pod.

    Attributes:
        namespace: Pod namespace.
        name: Pod name.
        node: Assigned node, or ``"unassigned"``.
        architecture: ``kubernetes.io/arch`` node selector value, or ``"none"``.
        phase: Phase derived from container states.
        status_detail: Terminated/waiting reason; empty when running.
        started_at: Pod start time, if reported.
        embedded_status: libvirt domain state; filled only for running pods
            by the status aggregator.
    """

    namespace: str
    name: str
    node: str
    architecture: str
    phase: Phase
    status_detail: str = ""
    started_at: datetime | None = None
    embedded_status: str = ""

    @property
    def key(self) -> WorkloadKey:
        return WorkloadKey(self.namespace, self.name)

    @property
    def status_label(self) -> str:
        """Reason when one was reported, otherwise the phase name."""
        return self.status_detail or self.phase.value


@dataclass(frozen=True)
class WatchEvent:
    """Normalized watch event for a single pod."""

    type: str
    name: str
    phase: str | None = None


@dataclass(frozen=True)
class CommandResult:
    """Non-empty output of a dispatched command."""

    namespace: str
    name: str
    output: str
