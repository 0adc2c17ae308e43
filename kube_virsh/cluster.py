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

"""Kubernetes API access: pod listing, single-pod watch, and exec channels."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from kubernetes import client, config, watch
from kubernetes.client.exceptions import ApiException
from kubernetes.config.config_exception import ConfigException
from kubernetes.stream import stream
from urllib3.exceptions import HTTPError
from websocket import WebSocketException

from kube_virsh import logger
from kube_virsh.config import KubeVirshConfig
from kube_virsh.errors import ClusterQueryError, ExecError
from kube_virsh.models import WatchEvent


class ClusterClient:
    """Shared handle over the CoreV1 API.

    List and watch calls go through one ``CoreV1Api``. Exec channels are
    opened on a fresh ``ApiClient`` each time because ``stream()`` swaps the
    request function of the client it is handed, which would break list and
    watch calls running concurrently in other threads.
    """

    def __init__(self, configuration: client.Configuration) -> None:
        self._configuration = configuration
        self._core = client.CoreV1Api(client.ApiClient(configuration))

    def list_pods(self) -> list[client.V1Pod]:
        """List pods across all namespaces.

        Raises:
            ClusterQueryError: If the list call fails.
        """
        try:
            return self._core.list_pod_for_all_namespaces().items
        except (ApiException, HTTPError, OSError) as err:
            raise ClusterQueryError(f"Failed to list pods: {err}") from err

    def watch_pod(self, namespace: str, name: str, timeout_seconds: int) -> Iterator[WatchEvent]:
        """Watch a single pod by exact name for at most *timeout_seconds*.

        Args:
            namespace: Pod namespace.
            name: Pod name, matched with a ``metadata.name`` field selector.
            timeout_seconds: Server-side timeout of the watch request.

        Yields:
            Normalized watch events, ending when the server closes the watch.

        Raises:
            ClusterQueryError: If the watch cannot be opened or read.
        """
        w = watch.Watch()
        try:
            for raw in w.stream(
                self._core.list_namespaced_pod,
                namespace,
                field_selector=f"metadata.name={name}",
                resource_version="0",
                timeout_seconds=timeout_seconds,
            ):
                yield _to_watch_event(raw, name)
        except (ApiException, HTTPError, OSError) as err:
            raise ClusterQueryError(f"Failed to watch pod {namespace}/{name}: {err}") from err
        finally:
            w.stop()

    def open_exec(self, namespace: str, name: str, command: list[str]) -> Any:
        """Start *command* in the pod and return its unread exec channel.

        Only stdout is attached. The caller owns the returned ``WSClient`` and
        must close it.

        Raises:
            ExecError: If the attach fails.
        """
        with client.ApiClient(self._configuration) as api_client:
            core = client.CoreV1Api(api_client)
            try:
                return stream(
                    core.connect_get_namespaced_pod_exec,
                    name,
                    namespace,
                    command=command,
                    stderr=False,
                    stdin=False,
                    stdout=True,
                    tty=False,
                    binary=True,
                    _preload_content=False,
                )
            except (ApiException, WebSocketException, OSError) as err:
                raise ExecError(f"Failed to exec in pod {namespace}/{name}: {err}") from err


def _to_watch_event(raw: dict, name: str) -> WatchEvent:
    obj = raw.get("object")
    status = getattr(obj, "status", None)
    return WatchEvent(
        type=raw.get("type", ""),
        name=name,
        phase=getattr(status, "phase", None),
    )


def connect(cfg: KubeVirshConfig) -> ClusterClient:
    """Build a ClusterClient from kubeconfig, falling back to in-cluster config.

    The in-cluster fallback is only tried when neither a kubeconfig path nor
    a context was requested explicitly.

    Raises:
        ClusterQueryError: If no usable cluster configuration is found.
    """
    configuration = client.Configuration()
    try:
        config.load_kube_config(
            config_file=cfg.kubeconfig,
            context=cfg.context,
            client_configuration=configuration,
        )
        return ClusterClient(configuration)
    except (ConfigException, OSError) as err:
        if cfg.kubeconfig or cfg.context:
            raise ClusterQueryError(f"Failed to load kubeconfig: {err}") from err
        logger.debug("No usable kubeconfig (%s), trying in-cluster config", err)

    try:
        config.load_incluster_config(client_configuration=configuration)
    except ConfigException as err:
        raise ClusterQueryError(f"No cluster configuration found: {err}") from err
    return ClusterClient(configuration)
