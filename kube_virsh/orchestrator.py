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

"""Orchestration functions that compose domain modules into workflows."""

from __future__ import annotations

from typing import Any

from rich.markup import escape

from kube_virsh import console
from kube_virsh.aggregator import aggregate
from kube_virsh.config import KubeVirshConfig, WorkloadFamily
from kube_virsh.dispatcher import dispatch
from kube_virsh.inventory import build_inventory, name_prefix
from kube_virsh.models import CommandResult, WorkloadKey, WorkloadRecord
from kube_virsh.output import print_inventory


def run_list(
    cluster: Any,
    family: WorkloadFamily,
    cfg: KubeVirshConfig,
    *,
    with_vm_status: bool | None = None,
) -> dict[WorkloadKey, WorkloadRecord]:
    """Inventory a workload family and print it.

    Args:
        cluster: Shared ClusterClient handle.
        family: Workload family supplying the namespace and name prefixes.
        cfg: Runtime configuration.
        with_vm_status: Override of ``family.with_vm_status``, or None.

    Returns:
        The printed inventory.

    Raises:
        ClusterQueryError: If the pod listing fails.
    """
    if with_vm_status is None:
        with_vm_status = family.with_vm_status

    records = build_inventory(cluster, family.namespace_prefix, name_prefix(family.name_prefix))
    if with_vm_status:
        aggregate(
            cluster,
            records,
            max_workers=cfg.max_concurrency,
            ready_timeout=cfg.ready_timeout_seconds,
            shell=cfg.exec_shell,
        )
    print_inventory(records, with_vm_status=with_vm_status)
    return records


def run_exec(
    cluster: Any,
    family: WorkloadFamily,
    cfg: KubeVirshConfig,
    short_name: str,
    logical_command: str,
) -> list[CommandResult]:
    """Dispatch a logical command to the family's pods matching *short_name*.

    Families without exec support are a no-op.

    Raises:
        ClusterQueryError: If the pod listing fails.
    """
    if not family.supports_exec:
        console.print(f"[yellow]⚠️  '{escape(logical_command)}' is not supported for pod type {family.name}[/yellow]")
        return []
    return dispatch(
        cluster,
        family.namespace_prefix,
        short_name,
        logical_command,
        max_workers=cfg.max_concurrency,
        ready_timeout=cfg.ready_timeout_seconds,
        shell=cfg.exec_shell,
    )
