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

"""The list subcommand."""

from __future__ import annotations

import typer

from kube_virsh import cluster, logger
from kube_virsh.commands import CliState
from kube_virsh.errors import ClusterQueryError
from kube_virsh.orchestrator import run_list


def list_pods(
    ctx: typer.Context,
    vm_status: bool | None = typer.Option(
        None, "--vm-status/--no-vm-status",
        help="Query virsh in running pods (default depends on --pod)"),
) -> None:
    """List matching pods with node, phase, and VM status."""
    state: CliState = ctx.obj
    try:
        client = cluster.connect(state.config)
        run_list(client, state.family, state.config, with_vm_status=vm_status)
    except ClusterQueryError as err:
        logger.error("%s", err)
        raise typer.Exit(code=1) from err
