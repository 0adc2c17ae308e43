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

"""Error taxonomy.

Only ``ClusterQueryError`` raised by the initial pod listing is fatal to an
invocation. The others are contained by the task that hit them.
"""

from __future__ import annotations


class KubeVirshError(Exception):
    """Base class for all kube-virsh errors."""


class ClusterQueryError(KubeVirshError):
    """A list or watch call against the cluster API failed."""


class ReadinessTimeoutError(KubeVirshError, TimeoutError):
    """The watch window closed before the pod was observed Running."""


class ExecError(KubeVirshError):
    """Attaching to a pod or reading its exec stream failed."""


class MalformedRecordError(KubeVirshError):
    """A single pod's fields could not be extracted into a record."""


class UnknownWorkloadFamilyError(KubeVirshError, ValueError):
    """The requested workload family is not defined."""
