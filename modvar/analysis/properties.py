"""Property annotations for modifiable variable slots.

Holders describe what a slot carries (a length, a signature, key material...)
by mapping slot names to a ``VariableProperty``::

    class ServerHello(ModifiableVariableHolder):
        modifiable_fields = ("length", "random")
        variable_properties = {
            "length": VariableProperty(type=PropertyType.LENGTH),
            "random": VariableProperty(type=PropertyType.KEY_MATERIAL, min_length=32, max_length=32),
        }

Harnesses use the annotations to target a class of fields, and the
validator checks the length bounds.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class PropertyType(str, enum.Enum):
    """What a slot means in its protocol."""

    LENGTH = "length"
    COUNT = "count"
    PADDING = "padding"
    PROTOCOL_CONSTANT = "protocol_constant"
    SIGNATURE = "signature"
    CIPHERTEXT = "ciphertext"
    HMAC = "hmac"
    PUBLIC_KEY = "public_key"
    PRIVATE_KEY = "private_key"
    KEY_MATERIAL = "key_material"
    CERTIFICATE = "certificate"
    PLAIN_PROTOCOL_MESSAGE = "plain_protocol_message"
    PLAIN_RECORD = "plain_record"
    COOKIE = "cookie"
    NONE = "none"
    BEHAVIOR_SWITCH = "behavior_switch"


class PropertyFormat(str, enum.Enum):
    """Encoding of a slot's value."""

    ASN1 = "asn1"
    PKCS1 = "pkcs1"
    NONE = "none"


@dataclass(frozen=True)
class VariableProperty:
    type: PropertyType = PropertyType.NONE
    format: PropertyFormat = PropertyFormat.NONE
    min_length: int | None = None
    max_length: int | None = None


def declared_variable_properties(cls: type) -> dict[str, VariableProperty]:
    """Merge ``variable_properties`` across the MRO; subclasses override bases."""
    merged: dict[str, VariableProperty] = {}
    for klass in reversed(cls.__mro__):
        merged.update(klass.__dict__.get("variable_properties", {}))
    return merged
