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

"""Pod inventory: one cluster-wide list call, filtered and extracted client-side."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from kube_virsh import logger
from kube_virsh.constants import ARCH_NONE, LABEL_ARCH, NODE_UNASSIGNED, POD_PHASE_PENDING
from kube_virsh.errors import MalformedRecordError
from kube_virsh.models import Phase, WorkloadKey, WorkloadRecord

NamePredicate = Callable[[str], bool]


def name_prefix(prefix: str) -> NamePredicate:
    """Predicate used by ``list``: pod name starts with *prefix*."""
    return lambda name: name.startswith(prefix)


def name_contains(fragment: str) -> NamePredicate:
    """Predicate used by command dispatch: pod name contains *fragment*."""
    return lambda name: fragment in name


# ============================================================================
# Field extraction
# ============================================================================

def _pod_key(pod: Any) -> WorkloadKey:
    meta = getattr(pod, "metadata", None)
    namespace = getattr(meta, "namespace", None)
    name = getattr(meta, "name", None)
    if not namespace or not name:
        raise MalformedRecordError(f"pod without namespace/name: {namespace!r}/{name!r}")
    return WorkloadKey(namespace, name)


def _architecture(spec: Any) -> str:
    node_selector = getattr(spec, "node_selector", None) or {}
    arch = node_selector.get(LABEL_ARCH)
    if not arch:
        return ARCH_NONE
    return str(arch).replace('"', "")


def derive_phase(status: Any) -> tuple[Phase, str]:
    """Derive (phase, detail) from a pod status.

    A running container wins over a terminated one, which wins over a
    waiting one. Pods without container statuses (not yet scheduled) fall
    back to the pod phase.

    Args:
        status: ``V1PodStatus`` or None.

    Returns:
        Tuple of (phase, status_detail).
    """
    container_statuses = getattr(status, "container_statuses", None) or []
    states = [cs.state for cs in container_statuses if getattr(cs, "state", None) is not None]

    if any(state.running for state in states):
        return Phase.RUNNING, ""
    terminated = next((state.terminated for state in states if state.terminated), None)
    if terminated is not None:
        return Phase.TERMINATED, terminated.reason or "Terminated"
    waiting = next((state.waiting for state in states if state.waiting), None)
    if waiting is not None:
        return Phase.PENDING, waiting.reason or "Waiting"

    reason = getattr(status, "reason", None) or ""
    if not container_statuses and getattr(status, "phase", None) == POD_PHASE_PENDING:
        return Phase.PENDING, reason
    return Phase.UNKNOWN, reason


def extract_record(pod: Any) -> WorkloadRecord:
    """Build a WorkloadRecord from a ``V1Pod``, defaulting optional fields.

    Raises:
        MalformedRecordError: If the pod's identity or status cannot be read.
    """
    key = _pod_key(pod)
    spec = getattr(pod, "spec", None)
    status = getattr(pod, "status", None)
    try:
        phase, detail = derive_phase(status)
    except (AttributeError, TypeError) as err:
        raise MalformedRecordError(f"{key.namespace}/{key.name}: unreadable status: {err}") from err

    return WorkloadRecord(
        namespace=key.namespace,
        name=key.name,
        node=getattr(spec, "node_name", None) or NODE_UNASSIGNED,
        architecture=_architecture(spec),
        phase=phase,
        status_detail=detail,
        started_at=getattr(status, "start_time", None),
    )


# ============================================================================
# Inventory
# ============================================================================

def build_inventory(
    cluster: Any,
    namespace_prefix: str,
    name_predicate: NamePredicate,
) -> dict[WorkloadKey, WorkloadRecord]:
    """List all pods and keep those matching the namespace prefix and name predicate.

    Args:
        cluster: Shared ClusterClient handle.
        namespace_prefix: Namespaces must start with this prefix.
        name_predicate: Filter applied to pod names.

    Returns:
        Mapping of (namespace, name) to freshly built records.

    Raises:
        ClusterQueryError: If the list call fails.
    """
    pods = cluster.list_pods()
    inventory: dict[WorkloadKey, WorkloadRecord] = {}
    for pod in pods:
        try:
            key = _pod_key(pod)
            if not key.namespace.startswith(namespace_prefix) or not name_predicate(key.name):
                continue
            inventory[key] = extract_record(pod)
        except MalformedRecordError as err:
            logger.warning("Dropping pod: %s", err)
    logger.debug("Matched %d of %d pods", len(inventory), len(pods))
    return inventory
