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

"""Constants for pod selection, remote commands, and output layout."""

from __future__ import annotations

# -- Pod spec lookups --
LABEL_ARCH = "kubernetes.io/arch"
ARCH_NONE = "none"
NODE_UNASSIGNED = "unassigned"
POD_PHASE_RUNNING = "Running"
POD_PHASE_PENDING = "Pending"

# -- Watch event types --
EVENT_ADDED = "ADDED"
EVENT_MODIFIED = "MODIFIED"
EVENT_DELETED = "DELETED"
EVENT_ERROR = "ERROR"

# -- Remote commands --
DEFAULT_EXEC_SHELL = "bash"
VM_STATUS_COMMAND = "virsh --quiet list --all"
VIRSH_DUMPXML_TEMPLATE = "virsh dumpxml {domain} --inactive"
LIBVIRTD_LOG_PATH = "/var/log/libvirt/libvirtd.log"
CMD_GETXML = "getxml"
CMD_LOGS = "logs"

# -- Workload families --
FAMILY_ECS = "ecs"
FAMILY_AGENT = "agent"
DEFAULT_FAMILY = FAMILY_ECS
ECS_NAMESPACE_PREFIX = "tenant-"
ECS_NAME_PREFIX = "ecs-"
AGENT_NAMESPACE_PREFIX = "product-ecs"
AGENT_NAME_PREFIX = "ecs-node-agent-"

# -- Parallelism & limits --
DEFAULT_READY_TIMEOUT_SECONDS = 3
DEFAULT_MAX_CONCURRENCY = 16
EXEC_UPDATE_TIMEOUT_SECONDS = 1

# -- Output layout --
STATUS_PLACEHOLDER = "-"
WIDE_COLUMN_WIDTHS = (8, 25, 25, 25, 20, 25)
NARROW_COLUMN_WIDTHS = (25, 25, 25, 20, 25)
