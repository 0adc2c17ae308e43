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

"""Remote command execution over an attached exec channel."""

from __future__ import annotations

import codecs
from typing import Any

from websocket import WebSocketException

from kube_virsh import logger
from kube_virsh.constants import DEFAULT_EXEC_SHELL, EXEC_UPDATE_TIMEOUT_SECONDS
from kube_virsh.errors import ExecError


def shell_command(command: str, shell: str = DEFAULT_EXEC_SHELL) -> list[str]:
    """Wrap *command* as ``[shell, "-c", command]``."""
    return [shell, "-c", command]


def execute(cluster: Any, namespace: str, name: str, command_tokens: list[str]) -> str:
    """Run a command in a pod and return everything it wrote to stdout.

    Reads until the remote process exits. Invalid UTF-8 sequences are
    dropped. Stderr is not attached. The call is attempted once and has no
    deadline of its own.

    Args:
        cluster: Shared ClusterClient handle.
        namespace: Pod namespace.
        name: Pod name.
        command_tokens: argv of the remote process.

    Returns:
        Decoded stdout text, possibly empty.

    Raises:
        ExecError: If attaching or reading the channel fails.
    """
    channel = cluster.open_exec(namespace, name, command_tokens)
    decoder = codecs.getincrementaldecoder("utf-8")(errors="ignore")
    chunks: list[str] = []
    try:
        while channel.is_open():
            channel.update(timeout=EXEC_UPDATE_TIMEOUT_SECONDS)
            if channel.peek_stdout():
                chunks.append(_decode(decoder, channel.read_stdout()))
        # Frames that arrived together with the close.
        if channel.peek_stdout():
            chunks.append(_decode(decoder, channel.read_stdout()))
        chunks.append(decoder.decode(b"", final=True))
    except (WebSocketException, OSError) as err:
        raise ExecError(f"Exec stream of pod {namespace}/{name} failed: {err}") from err
    finally:
        channel.close()

    output = "".join(chunks)
    logger.debug("%s/%s: %r returned %d chars", namespace, name, command_tokens, len(output))
    return output


def _decode(decoder: codecs.IncrementalDecoder, chunk: bytes | str) -> str:
    if isinstance(chunk, str):
        return chunk
    return decoder.decode(chunk)
