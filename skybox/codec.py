"""Framing of protocol messages.

Every frame starts with eight zero bytes of padding and a big-endian 16-bit
message type. Most messages follow with a compact JSON body; ``file_data``
carries a binary body and ``ack``/``done`` carry none.

Decoders return ``None`` when the frame is not of the expected type or its
body cannot be read.
"""

from __future__ import annotations

from typing import Callable, TypeVar, Union

from .message import (
    Ack,
    CreateDir,
    DeleteFileRequest,
    Done,
    DownloadFileRequest,
    DownloadFileResponse,
    ErrorMessage,
    FileData,
    FilesRequest,
    FilesResponse,
    Keepalive,
    LoginRequest,
    LoginToken,
    MessageType,
    RenameRequest,
    UploadFileRequest,
    UploadFileResponse,
)
from .netbuffer import BufferUnderflow, ReadBuffer, WriteBuffer
from .reflect import ReflectError, deserialize_struct, serialize_struct

MAX_JSON_FRAME = 2048

T = TypeVar("T")
Data = Union[bytes, bytearray, memoryview, str]


def _as_bytes(data: Data) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8", "surrogateescape")
    return bytes(data)


def _read_header(data: Data) -> tuple[int, ReadBuffer]:
    reader = ReadBuffer(_as_bytes(data))
    try:
        reader.read_uint64()
    except BufferUnderflow:
        pass
    try:
        kind = reader.read_uint16()
    except BufferUnderflow:
        kind = 0
    return kind, reader


def _frame(kind: MessageType, payload: bytes = b"") -> bytes:
    writer = WriteBuffer()
    writer.write_uint64(0)
    writer.write_uint16(int(kind))
    writer.write_bytes(payload)
    return writer.getvalue()


def _json_frame(kind: MessageType, msg) -> bytes:
    return _frame(kind, serialize_struct(msg).encode("utf-8"))


def _json_body(data: Data, kind: MessageType, limit: bool) -> bytes | None:
    raw = _as_bytes(data)
    if limit and len(raw) > MAX_JSON_FRAME:
        return None
    found, reader = _read_header(raw)
    if found != int(kind):
        return None
    body = reader.read_bytes(len(reader))
    return body or None


def _parse_json(data: Data, kind: MessageType, cls: Callable[[], T], limit: bool = True) -> T | None:
    body = _json_body(data, kind, limit)
    if body is None:
        return None
    try:
        return deserialize_struct(cls, body)
    except ReflectError:
        return None


def get_message_type(data: Data) -> MessageType | int:
    """Return the type tag of a frame; unknown tags come back as plain ints."""
    kind, _ = _read_header(data)
    try:
        return MessageType(kind)
    except ValueError:
        return kind


def message_type_to_string(message_type) -> str:
    """Name of a message type, or ``"unknown"``."""
    try:
        return MessageType(int(message_type)).name
    except (ValueError, TypeError):
        return "unknown"


def serialize_keepalive(msg: Keepalive) -> bytes:
    return _json_frame(MessageType.keepalive, msg)


def deserialize_keepalive(data: Data) -> Keepalive | None:
    return _parse_json(data, MessageType.keepalive, Keepalive)


def serialize_error_message(msg: ErrorMessage) -> bytes:
    return _json_frame(MessageType.error, msg)


def deserialize_error_message(data: Data) -> ErrorMessage | None:
    return _parse_json(data, MessageType.error, ErrorMessage)


def serialize_login_request(msg: LoginRequest) -> bytes:
    return _json_frame(MessageType.login, msg)


def deserialize_login_request(data: Data) -> LoginRequest | None:
    return _parse_json(data, MessageType.login, LoginRequest)


def serialize_login_token(msg: LoginToken) -> bytes:
    return _json_frame(MessageType.login, msg)


def deserialize_login_token(data: Data) -> LoginToken | None:
    return _parse_json(data, MessageType.login, LoginToken)


def serialize_files_request(msg: FilesRequest) -> bytes:
    return _json_frame(MessageType.files_request, msg)


def deserialize_files_request(data: Data) -> FilesRequest | None:
    return _parse_json(data, MessageType.files_request, FilesRequest)


def serialize_files_response(msg: FilesResponse) -> bytes:
    return _json_frame(MessageType.files_response, msg)


def deserialize_files_response(data: Data) -> FilesResponse | None:
    return _parse_json(data, MessageType.files_response, FilesResponse)


def serialize_upload_file_request(msg: UploadFileRequest) -> bytes:
    return _json_frame(MessageType.upload_file_request, msg)


def deserialize_upload_file_request(data: Data) -> UploadFileRequest | None:
    return _parse_json(data, MessageType.upload_file_request, UploadFileRequest)


def serialize_upload_file_response(msg: UploadFileResponse) -> bytes:
    return _json_frame(MessageType.upload_file_response, msg)


def deserialize_upload_file_response(data: Data) -> UploadFileResponse | None:
    return _parse_json(data, MessageType.upload_file_response, UploadFileResponse)


def serialize_download_file_request(msg: DownloadFileRequest) -> bytes:
    return _json_frame(MessageType.download_file_request, msg)


def deserialize_download_file_request(data: Data) -> DownloadFileRequest | None:
    return _parse_json(data, MessageType.download_file_request, DownloadFileRequest)


def serialize_download_file_response(msg: DownloadFileResponse) -> bytes:
    return _json_frame(MessageType.download_file_response, msg)


def deserialize_download_file_response(data: Data) -> DownloadFileResponse | None:
    """Decode a download response; an unreadable body yields default values."""
    body = _json_body(data, MessageType.download_file_response, True)
    if body is None:
        return None
    try:
        return deserialize_struct(DownloadFileResponse, body)
    except ReflectError:
        return DownloadFileResponse()


def serialize_delete_file_request(msg: DeleteFileRequest) -> bytes:
    return _json_frame(MessageType.delete_file_request, msg)


def deserialize_delete_file_request(data: Data) -> DeleteFileRequest | None:
    return _parse_json(data, MessageType.delete_file_request, DeleteFileRequest)


def serialize_file_data(msg: FileData) -> bytes:
    """Binary body: hash size, data size (both uint32), hash bytes, data bytes."""
    hash_bytes = msg.hash.encode("utf-8", "surrogateescape")
    payload = bytes(msg.data)
    writer = WriteBuffer()
    writer.write_uint32(len(hash_bytes))
    writer.write_uint32(len(payload))
    writer.write_bytes(hash_bytes)
    writer.write_bytes(payload)
    return _frame(MessageType.file_data, writer.getvalue())


def deserialize_file_data(data: Data) -> FileData | None:
    """Decode a file chunk; None if the frame is of another type or truncated."""
    kind, reader = _read_header(data)
    if kind != int(MessageType.file_data):
        return None
    try:
        hash_size = reader.read_uint32()
        data_size = reader.read_uint32()
        hash_bytes = reader.read_bytes(hash_size)
        payload = reader.read_bytes(data_size)
    except BufferUnderflow:
        return None
    return FileData(hash=hash_bytes.decode("utf-8", "surrogateescape"), data=payload)


def serialize_ack(msg: Ack | None = None) -> bytes:
    return _frame(MessageType.ack)


def deserialize_ack(data: Data) -> Ack | None:
    kind, _ = _read_header(data)
    return Ack() if kind == int(MessageType.ack) else None


def serialize_done(msg: Done | None = None) -> bytes:
    return _frame(MessageType.done)


def deserialize_done(data: Data) -> Done | None:
    kind, _ = _read_header(data)
    return Done() if kind == int(MessageType.done) else None


def serialize_create_dir(msg: CreateDir) -> bytes:
    return _json_frame(MessageType.dir, msg)


def deserialize_create_dir(data: Data) -> CreateDir | None:
    return _parse_json(data, MessageType.dir, CreateDir, limit=False)


def serialize_rename_request(msg: RenameRequest) -> bytes:
    return _json_frame(MessageType.rename, msg)


def deserialize_rename_request(data: Data) -> RenameRequest | None:
    return _parse_json(data, MessageType.rename, RenameRequest, limit=False)


def serialize_rename_response(msg: RenameRequest) -> bytes:
    return serialize_rename_request(msg)


def deserialize_rename_response(data: Data) -> RenameRequest | None:
    return deserialize_rename_request(data)