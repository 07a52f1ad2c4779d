import json

import pytest

from skybox.message import (
    Ack,
    CreateDir,
    DeleteFileRequest,
    Done,
    DownloadFileRequest,
    DownloadFileResponse,
    ErrorMessage,
    FileData,
    FileNode,
    FilesRequest,
    FilesResponse,
    Keepalive,
    LoginRequest,
    LoginToken,
    MessageType,
    RenameRequest,
    RenameResponse,
    UploadFileRequest,
    UploadFileResponse,
)
from skybox.reflect import deserialize_struct, serialize_struct


@pytest.mark.parametrize(
    "value, member",
    [
        (0, "error"),
        (1, "login"),
        (11, "file_data"),
        (15, "rename"),
    ],
)
def test_message_type_values(value, member):
    assert MessageType(value).name == member


def test_unknown_message_type_rejected():
    with pytest.raises(ValueError):
        MessageType(16)


def test_message_type_lookup_by_value():
    assert MessageType(14) is MessageType.dir


def test_defaults_are_empty():
    assert Keepalive() == Keepalive(0, 0, 0, 0)
    assert FilesResponse().files == []
    assert FileData().data == b""


def test_files_response_default_lists_not_shared():
    first = FilesResponse()
    first.files.append(FileNode(name="a"))
    assert FilesResponse().files == []


def test_rename_response_reads_as_rename_request():
    response = RenameResponse(type="file", token="token", parent=".", old_name="a", new_name="b")
    decoded = deserialize_struct(RenameRequest, serialize_struct(response))
    assert decoded == RenameRequest(type="file", token="token", parent=".", old_name="a", new_name="b")


def test_file_node_member_order():
    text = serialize_struct(FileNode(file_size=3, parent=".", name="a", type="file"))
    assert list(json.loads(text)) == ["parent", "name", "type", "file_size"]


def test_files_response_skips_id():
    text = serialize_struct(FilesResponse(id=9, token="token", dir="."))
    assert list(json.loads(text)) == ["files", "token", "dir"]


def test_download_request_skips_dir():
    text = serialize_struct(DownloadFileRequest(id=1, offset=2, dir="d", hash="h", filename="f"))
    assert list(json.loads(text)) == ["id", "filename", "offset", "hash"]


def test_files_response_round_trip():
    response = FilesResponse(
        token="token",
        dir=".",
        files=[FileNode(file_size=0, parent=".", name="docs", type="dir"),
               FileNode(file_size=10, parent=".", name="a.txt", type="file")],
    )
    assert deserialize_struct(FilesResponse, serialize_struct(response)) == response


def test_login_request_round_trip():
    password = "password"
    request = LoginRequest(username="alice", password=password)
    assert deserialize_struct(LoginRequest, serialize_struct(request)) == request


@pytest.mark.parametrize(
    "message",
    [
        CreateDir(parent=".", dir="new", token="token"),
        RenameRequest(type="dir", token="token", parent=".", old_name="a", new_name="b"),
        LoginToken(id=4, token="token"),
        FilesRequest(token="token", dir="."),
        UploadFileRequest(id=1, filesize=2048, dir=".", filename="f.bin"),
        UploadFileResponse(id=1, filename="f.bin"),
        ErrorMessage(id=2, error=-1),
        Keepalive(id=1, client_id=2, client_timestamp=3, server_timestamp=4),
        DownloadFileResponse(id=1, filesize=5, offset=0, hash="h", filename="f"),
        DeleteFileRequest(id=3, filename="f"),
    ],
)
def test_round_trip(message):
    assert deserialize_struct(type(message), serialize_struct(message)) == message


def test_empty_messages_compare_equal():
    assert Ack() == Ack()
    assert Done() == Done()
    assert serialize_struct(Ack()) == "{}"