"""Tests for multipart/form-data event parsing"""

import pytest

from conftest import BOUNDARY, api_event, build_multipart_body, upload_event
from ragapp.documents.multipart import parse_multipart_event
from ragapp.shared.errors import ClientInputError


def test_parses_fields_and_files_in_order():
    event = upload_event(
        files=[
            ("file", "report.pdf", "application/pdf", b"%PDF-1.4 first"),
            ("file", "notes.txt", "text/plain", b"second"),
        ],
        fields={"metadata": '{"title": "Q1 Report"}'},
    )

    form = parse_multipart_event(event)

    assert form.fields == {"metadata": '{"title": "Q1 Report"}'}
    assert [f.filename for f in form.files] == ["report.pdf", "notes.txt"]
    assert form.files[0].content_type == "application/pdf"
    assert form.files[0].content == b"%PDF-1.4 first"
    assert form.files[0].field_name == "file"


def test_plain_text_body_is_accepted():
    body = build_multipart_body(files=[("file", "a.txt", "text/plain", b"hello")])
    event = api_event(
        body=body,
        headers={"content-type": f"multipart/form-data; boundary={BOUNDARY}"},
        base64_encoded=False,
    )

    form = parse_multipart_event(event)

    assert form.files[0].content == b"hello"


def test_binary_content_survives_base64_round_trip():
    payload = bytes(range(256)) * 4
    event = upload_event(files=[("file", "blob.pdf", "application/pdf", payload)])

    form = parse_multipart_event(event)

    assert form.files[0].content == payload
    assert form.files[0].size == 1024


def test_client_side_path_is_stripped_from_filename():
    event = upload_event(files=[("file", "C:\\Users\\me\\report.pdf", "application/pdf", b"x")])

    form = parse_multipart_event(event)

    assert form.files[0].filename == "report.pdf"


def test_missing_part_content_type_defaults_to_octet_stream():
    body = (
        f"--{BOUNDARY}\r\n"
        'Content-Disposition: form-data; name="file"; filename="data.txt"\r\n\r\n'
        "abc\r\n"
        f"--{BOUNDARY}--\r\n"
    ).encode()
    event = api_event(body=body, headers={"Content-Type": f"multipart/form-data; boundary={BOUNDARY}"})

    form = parse_multipart_event(event)

    assert form.files[0].content_type == "application/octet-stream"


def test_rejects_non_multipart_content_type():
    event = api_event(body=b"{}", headers={"Content-Type": "application/json"})

    with pytest.raises(ClientInputError) as exc_info:
        parse_multipart_event(event)

    assert exc_info.value.status_code == 400


def test_rejects_missing_boundary():
    event = api_event(body=b"", headers={"Content-Type": "multipart/form-data"})

    with pytest.raises(ClientInputError, match="boundary"):
        parse_multipart_event(event)
