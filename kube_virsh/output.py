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

"""Stdout rendering of inventories and command results."""

from __future__ import annotations

from datetime import datetime

import typer

from kube_virsh import stdout_console
from kube_virsh.constants import NARROW_COLUMN_WIDTHS, STATUS_PLACEHOLDER, WIDE_COLUMN_WIDTHS
from kube_virsh.models import CommandResult, WorkloadKey, WorkloadRecord


def _started(started_at: datetime | None) -> str:
    return started_at.isoformat() if started_at else STATUS_PLACEHOLDER


def format_record(record: WorkloadRecord, with_vm_status: bool) -> str:
    """Render one fixed-width inventory line.

    Args:
        record: Record to render.
        with_vm_status: Whether to include the architecture column and the
            ``<phase>/<vm status>`` status cell.

    Returns:
        The line, without trailing padding.
    """
    if with_vm_status:
        status = f"{record.status_label}/{record.embedded_status or STATUS_PLACEHOLDER}"
        cells = (record.architecture, record.node, record.namespace, record.name, status,
                 _started(record.started_at))
        widths = WIDE_COLUMN_WIDTHS
    else:
        cells = (record.node, record.namespace, record.name, record.status_label,
                 _started(record.started_at))
        widths = NARROW_COLUMN_WIDTHS
    return "".join(f"{cell:<{width}}" for cell, width in zip(cells, widths)).rstrip()


def print_inventory(records: dict[WorkloadKey, WorkloadRecord], with_vm_status: bool) -> None:
    """Print one line per record, sorted by (namespace, name)."""
    for key in sorted(records):
        stdout_console.out(format_record(records[key], with_vm_status))


def print_command_output(result: CommandResult) -> None:
    # rich rewrites tabs and control characters; remote output is echoed as-is.
    typer.echo(result.output.rstrip("\n"))
