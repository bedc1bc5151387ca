"""Binary storage form of an AmlRegistrar.

Layout (little-endian):

    u32 authority length | authority utf-8 bytes
    u32 entry count | entry count x (u8 category discriminant, u8 risk score)

Entries are written in registrar iteration order, so decoding reproduces
both the contents and the order.
"""

from __future__ import annotations

import base64
import struct

from aml_registrar.aml.category import Category
from aml_registrar.aml.registrar import AccountId, AmlRegistrar, CategoryRisk
from aml_registrar.core.errors import RegistrarDecodeError

_U32 = struct.Struct("<I")
_ENTRY = struct.Struct("<BB")


def encode_registrar(registrar: AmlRegistrar) -> bytes:
    """Serialize a registrar to its byte-exact storage form."""
    authority, conditions = registrar.get_policy()
    authority_bytes = authority.encode("utf-8")

    parts = [_U32.pack(len(authority_bytes)), authority_bytes, _U32.pack(len(conditions))]
    parts.extend(_ENTRY.pack(category.discriminant, score) for category, score in conditions)
    return b"".join(parts)


def decode_registrar(data: bytes) -> AmlRegistrar:
    """Rebuild a registrar from its storage form.

    Raises RegistrarDecodeError for malformed payloads and InvalidRiskScore
    for stored thresholds outside 1..MAX_RISK_LEVEL.
    """
    view = memoryview(data)
    offset = 0

    def take(size: int, what: str) -> memoryview:
        nonlocal offset
        if offset + size > len(view):
            raise RegistrarDecodeError(
                f"Truncated registrar payload while reading {what}",
                details={"offset": offset, "needed": size, "length": len(view)},
            )
        chunk = view[offset : offset + size]
        offset += size
        return chunk

    (authority_len,) = _U32.unpack(take(_U32.size, "authority length"))
    try:
        authority = bytes(take(authority_len, "authority")).decode("utf-8")
    except UnicodeDecodeError as e:
        raise RegistrarDecodeError("Authority is not valid UTF-8") from e

    (count,) = _U32.unpack(take(_U32.size, "entry count"))
    conditions: list[CategoryRisk] = []
    for _ in range(count):
        tag, risk_score = _ENTRY.unpack(take(_ENTRY.size, "category entry"))
        try:
            category = Category.from_discriminant(tag)
        except ValueError as e:
            raise RegistrarDecodeError(str(e), details={"discriminant": tag}) from e
        conditions.append((category, risk_score))

    if offset != len(view):
        raise RegistrarDecodeError(
            "Trailing bytes after registrar payload",
            details={"trailing": len(view) - offset},
        )

    return AmlRegistrar.from_thresholds(AccountId(authority), conditions)


def encode_registrar_b64(registrar: AmlRegistrar) -> str:
    """Storage form as url-safe base64 text."""
    return base64.urlsafe_b64encode(encode_registrar(registrar)).decode("ascii")


def decode_registrar_b64(text: str) -> AmlRegistrar:
    try:
        data = base64.b64decode(text.strip().encode("ascii"), altchars=b"-_", validate=True)
    except ValueError as e:
        raise RegistrarDecodeError(f"Invalid base64 registrar payload: {e}") from e
    return decode_registrar(data)
