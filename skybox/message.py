"""Message types and payload structures of the file transfer protocol."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import ClassVar


class MessageType(IntEnum):
    """Type tag carried in every frame."""

    error = 0x00
    login = 0x01
    upload_file_request = 2
    upload_file_response = 3
    delete_file_request = 4
    delete_file_response = 5
    download_file_request = 6
    download_file_response = 7
    keepalive = 8
    files_request = 9
    files_response = 10
    file_data = 11
    ack = 12
    done = 13
    dir = 14
    rename = 15


@dataclass
class CreateDir:
    parent: str = ""
    dir: str = ""
    token: str = ""

    REFLECT_FIELDS: ClassVar[tuple[str, ...]] = ("parent", "dir", "token")


@dataclass
class RenameRequest:
    type: str = ""
    token: str = ""
    parent: str = ""
    old_name: str = ""
    new_name: str = ""

    REFLECT_FIELDS: ClassVar[tuple[str, ...]] = ("type", "token", "parent", "old_name", "new_name")


RenameResponse = RenameRequest


@dataclass
class LoginRequest:
    username: str = ""
    password: str = ""

    REFLECT_FIELDS: ClassVar[tuple[str, ...]] = ("username", "password")


@dataclass
class LoginToken:
    id: int = 0
    token: str = ""

    REFLECT_FIELDS: ClassVar[tuple[str, ...]] = ("id", "token")


@dataclass
class FilesRequest:
    token: str = ""
    dir: str = ""

    REFLECT_FIELDS: ClassVar[tuple[str, ...]] = ("token", "dir")


@dataclass
class FileNode:
    file_size: int = 0
    parent: str = ""
    name: str = ""
    type: str = ""

    REFLECT_FIELDS: ClassVar[tuple[str, ...]] = ("parent", "name", "type", "file_size")


@dataclass
class FilesResponse:
    id: int = 0
    token: str = ""
    dir: str = ""
    files: list[FileNode] = field(default_factory=list)

    REFLECT_FIELDS: ClassVar[tuple[str, ...]] = ("files", "token", "dir")


@dataclass
class Ack:
    """Acknowledgement; carries no payload."""


@dataclass
class Done:
    """End of a transfer; carries no payload."""


@dataclass
class UploadFileRequest:
    id: int = 0
    filesize: int = 0
    dir: str = ""
    filename: str = ""

    REFLECT_FIELDS: ClassVar[tuple[str, ...]] = ("id", "filesize", "dir", "filename")


@dataclass
class UploadFileResponse:
    id: int = 0
    filename: str = ""

    REFLECT_FIELDS: ClassVar[tuple[str, ...]] = ("id", "filename")


@dataclass
class FileData:
    """A chunk of file content with an optional hash; sent in binary form."""

    hash: str = ""
    data: bytes = b""


@dataclass
class ErrorMessage:
    id: int = 0
    error: int = 0

    REFLECT_FIELDS: ClassVar[tuple[str, ...]] = ("id", "error")


@dataclass
class Keepalive:
    id: int = 0
    client_id: int = 0
    client_timestamp: int = 0
    server_timestamp: int = 0

    REFLECT_FIELDS: ClassVar[tuple[str, ...]] = ("id", "client_id", "client_timestamp", "server_timestamp")


@dataclass
class DownloadFileRequest:
    id: int = 0
    offset: int = 0
    dir: str = ""
    hash: str = ""
    filename: str = ""

    REFLECT_FIELDS: ClassVar[tuple[str, ...]] = ("id", "filename", "offset", "hash")


@dataclass
class DownloadFileResponse:
    id: int = 0
    filesize: int = 0
    offset: int = 0
    hash: str = ""
    filename: str = ""

    REFLECT_FIELDS: ClassVar[tuple[str, ...]] = ("id", "filesize", "filename", "offset", "hash")


@dataclass
class DeleteFileRequest:
    id: int = 0
    filename: str = ""

    REFLECT_FIELDS: ClassVar[tuple[str, ...]] = ("id", "filename")