"""Site and user records plus their JSON wire format.

Pure data model, no I/O. Byte fields are stored as base64 strings under
the member names ``Cert``/``Key``/``Meta`` (sites) and ``Reg``/``Key``
(users) so existing buckets stay readable.

Unlike a lenient loader, ``from_json()`` never hands back an empty record
for bad input: anything that is not a complete record raises DecodeError.
"""

from __future__ import annotations

import base64
import binascii
import json
from dataclasses import dataclass
from typing import Any

from acmevault.errors import DecodeError


def _encode_bytes(value: bytes) -> str:
    return base64.b64encode(value).decode("ascii")


def _decode_bytes(obj: dict[str, Any], member: str) -> bytes:
    if member not in obj:
        raise DecodeError(f"record is missing {member!r}")
    raw = obj[member]
    # nil byte slices were written as null
    if raw is None:
        return b""
    if not isinstance(raw, str):
        raise DecodeError(f"record member {member!r} is not a base64 string")
    try:
        return base64.b64decode(raw, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError(f"record member {member!r} is not valid base64") from exc


def _load_object(data: bytes | str) -> dict[str, Any]:
    if not data:
        raise DecodeError("empty record payload")
    try:
        obj = json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise DecodeError(f"record payload is not JSON: {exc}") from exc
    if not isinstance(obj, dict):
        raise DecodeError("record payload is not a JSON object")
    return obj


# ---------------------------------------------------------------------------
# SiteData
# ---------------------------------------------------------------------------


@dataclass
class SiteData:
    """Certificate material for one domain."""

    cert: bytes = b""
    key: bytes = b""
    meta: bytes = b""

    def to_json(self) -> bytes:
        return json.dumps({
            "Cert": _encode_bytes(self.cert),
            "Key": _encode_bytes(self.key),
            "Meta": _encode_bytes(self.meta),
        }).encode("utf-8")

    @classmethod
    def from_json(cls, data: bytes | str) -> SiteData:
        """Decode a stored site payload. Raises DecodeError on bad input."""
        obj = _load_object(data)
        return cls(
            cert=_decode_bytes(obj, "Cert"),
            key=_decode_bytes(obj, "Key"),
            meta=_decode_bytes(obj, "Meta"),
        )


# ---------------------------------------------------------------------------
# UserData
# ---------------------------------------------------------------------------


@dataclass
class UserData:
    """ACME account registration and account key."""

    reg: bytes = b""
    key: bytes = b""

    def to_json(self) -> bytes:
        return json.dumps({
            "Reg": _encode_bytes(self.reg),
            "Key": _encode_bytes(self.key),
        }).encode("utf-8")

    @classmethod
    def from_json(cls, data: bytes | str) -> UserData:
        """Decode a stored user payload. Raises DecodeError on bad input."""
        obj = _load_object(data)
        return cls(
            reg=_decode_bytes(obj, "Reg"),
            key=_decode_bytes(obj, "Key"),
        )
