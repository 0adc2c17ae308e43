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

"""Best-effort broadcast of a logical command to pods matched by substring."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any

from rich.markup import escape

from kube_virsh import console, logger
from kube_virsh.constants import (
    DEFAULT_EXEC_SHELL,
    DEFAULT_MAX_CONCURRENCY,
    DEFAULT_READY_TIMEOUT_SECONDS,
)
from kube_virsh.errors import KubeVirshError
from kube_virsh.executor import execute, shell_command
from kube_virsh.inventory import build_inventory, name_contains
from kube_virsh.models import CommandResult, WorkloadRecord
from kube_virsh.output import print_command_output
from kube_virsh.readiness import await_ready
from kube_virsh.translator import translate


def _run_on_target(
    cluster: Any,
    record: WorkloadRecord,
    logical_command: str,
    ready_timeout: int,
    shell: str,
) -> CommandResult | None:
    """Translate, gate, and execute against one pod; None when skipped."""
    command = translate(logical_command, record.name)
    if command is None:
        logger.info("No '%s' command for pod %s/%s", logical_command, record.namespace, record.name)
        return None

    try:
        await_ready(cluster, record.namespace, record.name, ready_timeout)
        output = execute(cluster, record.namespace, record.name, shell_command(command, shell))
    except KubeVirshError as err:
        logger.warning("Skipping %s/%s: %s", record.namespace, record.name, err)
        return None

    if not output:
        return None
    return CommandResult(record.namespace, record.name, output)


def dispatch(
    cluster: Any,
    namespace_prefix: str,
    short_name: str,
    logical_command: str,
    *,
    max_workers: int = DEFAULT_MAX_CONCURRENCY,
    ready_timeout: int = DEFAULT_READY_TIMEOUT_SECONDS,
    shell: str = DEFAULT_EXEC_SHELL,
) -> list[CommandResult]:
    """Run *logical_command* in every pod whose name contains *short_name*.

    Each match is handled independently. Matches that fail readiness or
    exec are logged and skipped. Non-empty outputs are printed as they
    arrive.

    Args:
        cluster: Shared ClusterClient handle.
        namespace_prefix: Namespaces must start with this prefix.
        short_name: Substring matched against pod names.
        logical_command: One of ``translator.LOGICAL_COMMANDS``.
        max_workers: Upper bound on concurrent watch/exec tasks.
        ready_timeout: Readiness watch timeout in seconds.
        shell: Shell used to run the command.

    Returns:
        Results of the targets that produced output, in completion order.

    Raises:
        ClusterQueryError: If the initial pod listing fails.
    """
    records = build_inventory(cluster, namespace_prefix, name_contains(short_name))
    if not records:
        console.print(f"[yellow]⚠️  No pods match '{escape(short_name)}'[/yellow]")
        return []

    results: list[CommandResult] = []
    with ThreadPoolExecutor(max_workers=min(len(records), max_workers)) as executor:
        futures = {
            executor.submit(_run_on_target, cluster, record, logical_command, ready_timeout, shell): record
            for record in records.values()
        }
        for future in as_completed(futures):
            record = futures[future]
            try:
                result = future.result()
            except Exception:
                logger.exception("'%s' on %s/%s failed", logical_command, record.namespace, record.name)
                continue
            if result is not None:
                print_command_output(result)
                results.append(result)
    return results
