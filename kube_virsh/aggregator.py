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

"""Concurrent VM status lookup for running pods."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any

from kube_virsh import console, logger
from kube_virsh.constants import (
    DEFAULT_EXEC_SHELL,
    DEFAULT_MAX_CONCURRENCY,
    DEFAULT_READY_TIMEOUT_SECONDS,
    VM_STATUS_COMMAND,
)
from kube_virsh.errors import ClusterQueryError, ExecError, ReadinessTimeoutError
from kube_virsh.executor import execute, shell_command
from kube_virsh.models import Phase, WorkloadKey, WorkloadRecord
from kube_virsh.readiness import await_ready


def parse_vm_state(output: str) -> str:
    """Extract the domain state from ``virsh --quiet list --all`` output.

    The last non-empty line is split into ``Id Name State``. The state
    column may contain spaces (``shut off``). Lines with fewer columns yield
    their last token.

    Args:
        output: Raw command output.

    Returns:
        State string, or ``""`` for empty output.
    """
    lines = [line for line in output.splitlines() if line.strip()]
    if not lines:
        return ""
    fields = lines[-1].split(None, 2)
    return fields[-1].strip()


def _query_vm_status(
    cluster: Any,
    namespace: str,
    name: str,
    ready_timeout: int,
    shell: str,
) -> str:
    """Readiness is best-effort here: the exec is attempted either way."""
    try:
        await_ready(cluster, namespace, name, ready_timeout)
    except (ReadinessTimeoutError, ClusterQueryError) as err:
        logger.info("%s; querying VM status anyway", err)

    try:
        output = execute(cluster, namespace, name, shell_command(VM_STATUS_COMMAND, shell))
    except ExecError as err:
        logger.warning("VM status unknown for %s/%s: %s", namespace, name, err)
        return ""
    return parse_vm_state(output)


def aggregate(
    cluster: Any,
    records: dict[WorkloadKey, WorkloadRecord],
    *,
    max_workers: int = DEFAULT_MAX_CONCURRENCY,
    ready_timeout: int = DEFAULT_READY_TIMEOUT_SECONDS,
    shell: str = DEFAULT_EXEC_SHELL,
) -> dict[WorkloadKey, WorkloadRecord]:
    """Fill ``embedded_status`` of every running record, in parallel.

    One task per running record, at most *max_workers* in flight. Results
    are merged on the calling thread as tasks complete. A failing task
    leaves its record's status empty and never affects the others. Returns
    once every task has finished.

    Args:
        cluster: Shared ClusterClient handle.
        records: Inventory to update in place.
        max_workers: Upper bound on concurrent watch/exec tasks.
        ready_timeout: Readiness watch timeout in seconds.
        shell: Shell used to run the virsh command.

    Returns:
        The same *records* mapping.
    """
    running: list[WorkloadRecord] = []
    for record in records.values():
        record.embedded_status = ""
        if record.phase is Phase.RUNNING:
            running.append(record)
    if not running:
        return records

    console.print(f"[yellow]ℹ️  Querying VM status in {len(running)} running pods...[/yellow]")
    with ThreadPoolExecutor(max_workers=min(len(running), max_workers)) as executor:
        futures = {
            executor.submit(_query_vm_status, cluster, r.namespace, r.name, ready_timeout, shell): r
            for r in running
        }
        for future in as_completed(futures):
            record = futures[future]
            try:
                record.embedded_status = future.result()
            except Exception:
                logger.exception("VM status query for %s/%s failed", record.namespace, record.name)
    return records
