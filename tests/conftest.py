"""
Shared pytest fixtures for swaywsr tests.
"""

import itertools
import json
import os
import shutil
import socket
import struct
import tempfile
import threading

import pytest

from swaywsr.types import Node, SwaywsrConfig

IPC_HEADER = struct.Struct("=6sII")
IPC_MAGIC = b"i3-ipc"
WORKSPACE_EVENT = 0x80000000


class IpcServer:
    """Unix socket speaking the i3 ipc framing.

    Every accepted connection gets the next script, a list of ("reply", payload)
    and ("event", payload) steps. A reply answers the next request, an event is
    pushed unasked. When the script is done the server closes its writing side,
    so the client reads EOF.
    """

    def __init__(self, path, scripts):
        self.path = path
        self.requests = []
        self.__scripts = list(scripts)
        self.__socket = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        self.__socket.bind(path)
        self.__socket.listen()
        threading.Thread(target=self.__accept, daemon=True).start()

    def close(self):
        self.__socket.close()

    def __accept(self):
        while True:
            try:
                conn, _ = self.__socket.accept()
            except OSError:
                return
            script = self.__scripts.pop(0) if self.__scripts else []
            threading.Thread(
                target=self.__serve, args=(conn, script), daemon=True
            ).start()

    @staticmethod
    def __recv_exact(conn, size):
        data = b""
        while len(data) < size:
            chunk = conn.recv(size - len(data))
            if not chunk:
                return None
            data += chunk
        return data

    @staticmethod
    def __send(conn, msg_type, payload):
        body = payload.encode("utf-8")
        conn.sendall(IPC_HEADER.pack(IPC_MAGIC, len(body), msg_type) + body)

    def __serve(self, conn, script):
        with conn:
            for kind, payload in script:
                if kind == "event":
                    self.__send(conn, WORKSPACE_EVENT, payload)
                    continue
                header = self.__recv_exact(conn, IPC_HEADER.size)
                if header is None:
                    return
                _, length, msg_type = IPC_HEADER.unpack(header)
                body = self.__recv_exact(conn, length) if length else b""
                self.requests.append((msg_type, body.decode("utf-8")))
                self.__send(conn, msg_type, payload)
            try:
                conn.shutdown(socket.SHUT_WR)
                while conn.recv(4096):
                    pass
            except OSError:
                pass


@pytest.fixture
def ipc_server():
    """Factory fixture for scripted ipc servers on short socket paths."""

    directory = tempfile.mkdtemp(prefix="swaywsr-")
    servers = []

    def factory(*scripts):
        path = os.path.join(directory, f"ipc{len(servers)}.sock")
        server = IpcServer(path, scripts)
        servers.append(server)
        return server

    yield factory

    for server in servers:
        server.close()
    shutil.rmtree(directory, ignore_errors=True)


@pytest.fixture
def ipc_json():
    """Serialize a snapshot like sway does, every node carrying a rect."""

    def add_rect(data):
        data["rect"] = {"x": 0, "y": 0, "width": 800, "height": 600}
        for child in data["nodes"] + data["floating_nodes"]:
            add_rect(child)
        return data

    def factory(node: Node) -> str:
        data = node.model_dump(mode="json", by_alias=True, exclude_none=True)
        return json.dumps(add_rect(data))

    return factory


@pytest.fixture
def make_node():
    """Factory fixture for tree nodes with unique ids."""

    ids = itertools.count(1)

    def factory(type="con", name=None, nodes=(), floating_nodes=(), **kwargs):
        return Node.model_validate(
            {
                "id": next(ids),
                "type": type,
                "name": name,
                "nodes": list(nodes),
                "floating_nodes": list(floating_nodes),
                **kwargs,
            }
        )

    return factory


@pytest.fixture
def make_tree(make_node):
    """Wrap workspaces into root -> output nodes."""

    def factory(*workspaces, focused_root=False):
        output = make_node("output", "eDP-1", nodes=workspaces)
        return make_node("root", "root", nodes=[output], focused=focused_root)

    return factory


@pytest.fixture
def config():
    return SwaywsrConfig(
        icons={"firefox": "🦊", "kitty": "🖥", "code": "📝"},
        title_icons={"vim": "✎"},
    )
