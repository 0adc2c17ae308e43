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

"""The getxml and logs subcommands."""

from __future__ import annotations

import typer

from kube_virsh import cluster, logger
from kube_virsh.commands import CliState
from kube_virsh.constants import CMD_GETXML, CMD_LOGS
from kube_virsh.errors import ClusterQueryError
from kube_virsh.orchestrator import run_exec


def _run(ctx: typer.Context, short_name: str, logical_command: str) -> None:
    state: CliState = ctx.obj
    try:
        client = cluster.connect(state.config)
        run_exec(client, state.family, state.config, short_name, logical_command)
    except ClusterQueryError as err:
        logger.error("%s", err)
        raise typer.Exit(code=1) from err


def getxml(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="The name of pod (substring match)."),
) -> None:
    """Dump the inactive libvirt domain XML from matching pods."""
    _run(ctx, name, CMD_GETXML)


def logs(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="The name of pod (substring match)."),
) -> None:
    """Print the libvirtd log from matching pods."""
    _run(ctx, name, CMD_LOGS)
