# skybox

Building blocks for a small client/server file transfer service:

- `skybox.message` – the protocol's message types: the `MessageType` enum and
  dataclasses such as `LoginRequest`, `LoginToken`, `FilesRequest`,
  `FilesResponse`, `FileNode`, `UploadFileRequest`, `UploadFileResponse`,
  `DownloadFileRequest`, `DownloadFileResponse`, `DeleteFileRequest`,
  `FileData`, `CreateDir`, `RenameRequest`, `Keepalive`, `ErrorMessage`,
  `Ack` and `Done`.
- `skybox.codec` – turns each message into bytes and back. Every frame starts
  with 8 zero bytes of padding and a big-endian 16-bit message type; most
  bodies are compact JSON, `FileData` is a length-prefixed binary body, and
  `Ack`/`Done` have no body. Decoders return `None` when a frame is of another
  type or its body cannot be read; most JSON frames longer than 2048 bytes are
  refused.
- `skybox.reflect` – the JSON member mapping behind the codec
  (`serialize_struct`, `deserialize_struct`, `ReflectError`).
- `skybox.netbuffer` – `WriteBuffer` and `ReadBuffer` for network-order
  integers and raw bytes; reading past the end raises `BufferUnderflow`.
- `skybox.byteorder` – big- and little-endian integer packing helpers and
  `buffers_to_bytes`.
- `skybox.executors` – `Executors`, a pool of event loops on their own
  threads, handed out round robin.
- `skybox.tcp_server` – `TcpServer` and `TcpServerHandle`, an accept loop on
  one of those event loops.
- `skybox.http_client` – `HttpClient`, a one-shot JSON POST client reporting
  `(error, body)` to a callback; the URL's host must be an IP address.
- `skybox.sockets` – local/remote address helpers that answer `""` or `0`
  instead of raising.
- `skybox.log`, `skybox.scoped`, `skybox.errors`, `skybox.timefmt` – logging
  setup, scope-exit callbacks, exception logging and `MM:SS` / `HH:MM:SS`
  formatting.

No runtime dependencies beyond the standard library; Python 3.10 or later.

## Encoding and decoding messages

```python
from skybox.codec import (
    get_message_type,
    message_type_to_string,
    serialize_login_request,
    deserialize_login_request,
)
from skybox.message import LoginRequest

password = "password"
frame = serialize_login_request(LoginRequest(username="alice", password=password))

print(message_type_to_string(get_message_type(frame)))  # login
request = deserialize_login_request(frame)
print(request.username)  # alice
```

File contents travel as `FileData` frames:

```python
from skybox.codec import serialize_file_data, deserialize_file_data
from skybox.message import FileData

frame = serialize_file_data(FileData(hash="", data=b"hello"))
print(deserialize_file_data(frame).data)  # b'hello'
```

## Reading and writing buffers

```python
from skybox.netbuffer import WriteBuffer, ReadBuffer

w = WriteBuffer()
w.write_uint16(0x0102)
w.write_bytes(b"abc")

r = ReadBuffer(w.getvalue())
print(r.read_uint16())   # 258
print(r.read_bytes(3))   # b'abc'
print(len(r))            # 0
```

## Accepting connections

```python
from skybox.executors import Executors
from skybox.tcp_server import TcpServer, TcpServerHandle

with Executors(2) as pool:
    server = TcpServer(
        TcpServerHandle(accept=lambda conn: conn.close()),
        pool.get_executor(),
        "127.0.0.1",
        0,
    )
    host, port = server.startup().result()
    print(f"listening on {host}:{port}")
    server.shutdown()
```

## Logging and formatting

```python
from skybox.log import init_log, set_log_level, shutdown_log
from skybox.scoped import defer
from skybox.timefmt import format_time

init_log("client.log")
set_log_level("debug")
with defer(shutdown_log):
    print(format_time(3725))  # 01:02:05
    print(format_time(-1))    # --:--
```

## What the package does not do

It has no command to run and no finished file server or client. There is no
login or file handling behind the protocol, no storage of uploaded files, no
WebSocket or TLS sessions and no graphical client: the modules above are the
pieces such programs are built from.

## Running the tests

Install the `test` extra and run `pytest` from the project root.