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

"""Configuration classes and workload family definitions."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from kube_virsh.constants import (
    AGENT_NAME_PREFIX,
    AGENT_NAMESPACE_PREFIX,
    DEFAULT_EXEC_SHELL,
    DEFAULT_MAX_CONCURRENCY,
    DEFAULT_READY_TIMEOUT_SECONDS,
    ECS_NAME_PREFIX,
    ECS_NAMESPACE_PREFIX,
    FAMILY_AGENT,
    FAMILY_ECS,
)
from kube_virsh.errors import UnknownWorkloadFamilyError


# ============================================================================
# Configuration classes
# ============================================================================

class KubeVirshConfig(BaseSettings):
    """Runtime configuration, auto-loaded from KUBE_VIRSH_* env vars.

    Attributes:
        kubeconfig: Path to a kubeconfig file, or None for the default lookup.
        context: kubeconfig context to use, or None for the current context.
        max_concurrency: Upper bound on in-flight watch/exec tasks.
        ready_timeout_seconds: Server-side timeout of the readiness watch.
        exec_shell: Shell used to run remote commands (``<shell> -c <cmd>``).
    """

    model_config = SettingsConfigDict(env_prefix="KUBE_VIRSH_", extra="ignore")

    kubeconfig: str | None = None
    context: str | None = None
    max_concurrency: int = Field(default=DEFAULT_MAX_CONCURRENCY, ge=1, le=256)
    ready_timeout_seconds: int = Field(default=DEFAULT_READY_TIMEOUT_SECONDS, ge=1, le=300)
    exec_shell: str = DEFAULT_EXEC_SHELL


# ============================================================================
# Workload families
# ============================================================================

@dataclass(frozen=True)
class WorkloadFamily:
    """Namespace/name filter defaults for one kind of pod.

    Attributes:
        name: Value accepted by ``--pod``.
        namespace_prefix: Namespaces must start with this prefix.
        name_prefix: Pod names must start with this prefix in ``list``.
        with_vm_status: Whether ``list`` queries virsh in running pods.
        supports_exec: Whether ``getxml``/``logs`` apply to this family.
    """

    name: str
    namespace_prefix: str
    name_prefix: str
    with_vm_status: bool = False
    supports_exec: bool = False


WORKLOAD_FAMILIES: dict[str, WorkloadFamily] = {
    FAMILY_ECS: WorkloadFamily(
        name=FAMILY_ECS,
        namespace_prefix=ECS_NAMESPACE_PREFIX,
        name_prefix=ECS_NAME_PREFIX,
        with_vm_status=True,
        supports_exec=True,
    ),
    FAMILY_AGENT: WorkloadFamily(
        name=FAMILY_AGENT,
        namespace_prefix=AGENT_NAMESPACE_PREFIX,
        name_prefix=AGENT_NAME_PREFIX,
    ),
}


def resolve_family(name: str) -> WorkloadFamily:
    """Look up a workload family by its ``--pod`` value.

    Raises:
        UnknownWorkloadFamilyError: If *name* is not a known family.
    """
    try:
        return WORKLOAD_FAMILIES[name]
    except KeyError as err:
        raise UnknownWorkloadFamilyError(f"Unknown pod type {name}") from err
