"""Tests for SiteData/UserData JSON wire format."""

import json

import pytest

from acmevault.errors import DecodeError
from acmevault.records import SiteData, UserData


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------


class TestEncoding:
    def test_site_member_names_and_base64(self) -> None:
        payload = json.loads(SiteData(cert=b"cert", key=b"key", meta=b"meta").to_json())
        assert payload == {"Cert": "Y2VydA==", "Key": "a2V5", "Meta": "bWV0YQ=="}

    def test_user_member_names_and_base64(self) -> None:
        payload = json.loads(UserData(reg=b"reg", key=b"key").to_json())
        assert payload == {"Reg": "cmVn", "Key": "a2V5"}

    def test_arbitrary_bytes_survive(self) -> None:
        data = SiteData(cert=bytes(range(256)), key=b"\x00\xff", meta=b"")
        assert SiteData.from_json(data.to_json()) == data


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


class TestDecoding:
    def test_reads_existing_payload(self) -> None:
        raw = b'{"Cert":"Y2VydA==","Key":"a2V5","Meta":"bWV0YQ=="}'
        assert SiteData.from_json(raw) == SiteData(b"cert", b"key", b"meta")

    def test_null_member_is_empty_bytes(self) -> None:
        raw = b'{"Reg":null,"Key":"a2V5"}'
        assert UserData.from_json(raw) == UserData(reg=b"", key=b"key")

    def test_accepts_str(self) -> None:
        assert UserData.from_json('{"Reg":"","Key":""}') == UserData()

    @pytest.mark.parametrize(
        "raw",
        [
            b"",
            b"not json",
            b"null",
            b"[]",
            b'"string"',
            b"\xff\xfe",
            b'{"Cert":"Y2VydA==","Key":"a2V5"}',
            b'{"Cert":1,"Key":"a2V5","Meta":"bWV0YQ=="}',
            b'{"Cert":"***","Key":"a2V5","Meta":"bWV0YQ=="}',
        ],
    )
    def test_bad_site_payload_raises(self, raw: bytes) -> None:
        with pytest.raises(DecodeError):
            SiteData.from_json(raw)

    def test_site_payload_is_not_a_user(self) -> None:
        with pytest.raises(DecodeError, match="Reg"):
            UserData.from_json(SiteData(b"c", b"k", b"m").to_json())
