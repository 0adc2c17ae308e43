#!/usr/bin/env python3
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
cli.py - Inventory VM-hosting pods and run virsh commands inside them.

Subcommands:
    list     List matching pods with node, phase and VM status
    getxml   Dump the inactive domain XML from pods whose name contains NAME
    logs     Print the libvirtd log from pods whose name contains NAME

Examples:
    # List ecs pods in tenant-* namespaces with their VM state
    ./cli.py list

    # List node agents (no VM status)
    ./cli.py --pod agent list

    # Domain XML of every ecs pod matching "node7"
    ./cli.py getxml node7

Environment Variables:
    KUBE_VIRSH_KUBECONFIG, KUBE_VIRSH_CONTEXT, KUBE_VIRSH_MAX_CONCURRENCY,
    KUBE_VIRSH_READY_TIMEOUT_SECONDS, KUBE_VIRSH_EXEC_SHELL

For detailed usage information, run: ./cli.py --help
"""

from __future__ import annotations

import logging
import sys

import typer

from kube_virsh import console, logger
from kube_virsh.commands import CliState, exec_cmd, list_cmd
from kube_virsh.config import KubeVirshConfig, resolve_family
from kube_virsh.constants import DEFAULT_FAMILY
from kube_virsh.errors import UnknownWorkloadFamilyError

app = typer.Typer(
    help="Inventory VM-hosting pods and run virsh commands inside them.",
    no_args_is_help=True,
)


@app.callback()
def _main_callback(
    ctx: typer.Context,
    pod: str = typer.Option(
        DEFAULT_FAMILY, "--pod", "-p", help="The pod type. Value is ecs or agent."),
    kubeconfig: str | None = typer.Option(
        None, "--kubeconfig", help="kubeconfig path (overrides KUBE_VIRSH_KUBECONFIG)"),
    context: str | None = typer.Option(
        None, "--context", help="kubeconfig context (overrides KUBE_VIRSH_CONTEXT)"),
    max_concurrency: int | None = typer.Option(
        None, "--max-concurrency", min=1, max=256, help="Max in-flight watch/exec tasks"),
    ready_timeout: int | None = typer.Option(
        None, "--ready-timeout", min=1, max=300, help="Readiness watch timeout in seconds"),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Initialize logging and resolve the workload family for all subcommands."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )
    if not verbose:
        for noisy in ("kubernetes", "urllib3", "websocket"):
            logging.getLogger(noisy).setLevel(logging.WARNING)

    try:
        family = resolve_family(pod)
    except UnknownWorkloadFamilyError as err:
        logger.error("%s", err)
        raise typer.Exit(code=1) from err

    cfg = KubeVirshConfig()
    overrides: dict = {}
    if kubeconfig is not None:
        overrides["kubeconfig"] = kubeconfig
    if context is not None:
        overrides["context"] = context
    if max_concurrency is not None:
        overrides["max_concurrency"] = max_concurrency
    if ready_timeout is not None:
        overrides["ready_timeout_seconds"] = ready_timeout
    if overrides:
        cfg = cfg.model_copy(update=overrides)

    ctx.obj = CliState(config=cfg, family=family)


app.command("list")(list_cmd.list_pods)
app.command("getxml")(exec_cmd.getxml)
app.command("logs")(exec_cmd.logs)


def main() -> None:
    try:
        app()
    except Exception as e:
        console.print(f"[red]❌ {e}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
