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

"""Logical command names to shell commands."""

from __future__ import annotations

from collections.abc import Callable

from kube_virsh.constants import CMD_GETXML, CMD_LOGS, LIBVIRTD_LOG_PATH, VIRSH_DUMPXML_TEMPLATE


def domain_name(target_name: str) -> str | None:
    """libvirt domain hosted by a pod: its first two ``-``-separated tokens.

    Returns None when the pod name has fewer than two tokens.
    """
    tokens = target_name.split("-")
    if len(tokens) < 2:
        return None
    return f"{tokens[0]}-{tokens[1]}"


_COMMANDS: dict[str, Callable[[str], str]] = {
    CMD_GETXML: lambda domain: VIRSH_DUMPXML_TEMPLATE.format(domain=domain),
    CMD_LOGS: lambda domain: f"cat {LIBVIRTD_LOG_PATH}",
}

LOGICAL_COMMANDS = tuple(_COMMANDS)


def translate(logical_command: str, target_name: str) -> str | None:
    """Shell command for *logical_command* against *target_name*, or None.

    None is returned for unknown commands and for pod names that cannot
    address a domain, whichever command was asked for.
    """
    build = _COMMANDS.get(logical_command)
    domain = domain_name(target_name)
    if build is None or domain is None:
        return None
    return build(domain)
