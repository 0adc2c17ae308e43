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

"""kube_virsh - inventory and virsh command dispatch for VM-hosting pods."""

from __future__ import annotations

import logging

from rich.console import Console

# Diagnostics (banners, warnings) go to stderr; results go to stdout.
console = Console(stderr=True)
stdout_console = Console(highlight=False)
logger = logging.getLogger("kube_virsh")
