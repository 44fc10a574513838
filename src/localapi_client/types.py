"""Decoded values returned by the Local API.

The daemon owns these schemas. The client only checks their structure: the
payload must be a JSON object and every field it reads must carry the JSON
type it expects. The full decoded object stays available as ``raw``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Literal, TypeVar

from . import pem
from .errors import ParseError

JsonObject = dict[str, Any]
KeyEncoding = Literal["rsa", "pkcs8", "ec"]

T = TypeVar("T")

_MISSING = object()


@dataclass(frozen=True)
class Certificate:
    der: bytes

    def to_pem(self) -> str:
        return pem.encode("CERTIFICATE", self.der)


@dataclass(frozen=True)
class PrivateKey:
    der: bytes
    encoding: KeyEncoding = "pkcs8"

    def to_pem(self) -> str:
        label = {"rsa": "RSA PRIVATE KEY", "pkcs8": "PRIVATE KEY", "ec": "EC PRIVATE KEY"}[self.encoding]
        return pem.encode(label, self.der)

    def __repr__(self) -> str:
        return f"PrivateKey(encoding={self.encoding!r}, bytes={len(self.der)})"


@dataclass(frozen=True)
class UserProfile:
    id: int | None = None
    login_name: str = ""
    display_name: str = ""
    profile_pic_url: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "UserProfile":
        obj = _expect_object(data, "UserProfile")
        return cls(
            id=_field(obj, "ID", int, None),
            login_name=_field(obj, "LoginName", str, ""),
            display_name=_field(obj, "DisplayName", str, ""),
            profile_pic_url=_field(obj, "ProfilePicURL", str, ""),
        )


@dataclass(frozen=True)
class PeerStatus:
    id: str = ""
    public_key: str = ""
    host_name: str = ""
    dns_name: str = ""
    os: str = ""
    user_id: int | None = None
    tailscale_ips: list[str] = field(default_factory=list)
    online: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> "PeerStatus":
        obj = _expect_object(data, "PeerStatus")
        return cls(
            id=_field(obj, "ID", str, ""),
            public_key=_field(obj, "PublicKey", str, ""),
            host_name=_field(obj, "HostName", str, ""),
            dns_name=_field(obj, "DNSName", str, ""),
            os=_field(obj, "OS", str, ""),
            user_id=_field(obj, "UserID", int, None),
            tailscale_ips=_string_list(obj, "TailscaleIPs"),
            online=_field(obj, "Online", bool, False),
        )


@dataclass(frozen=True)
class Status:
    backend_state: str
    version: str = ""
    auth_url: str = ""
    tailscale_ips: list[str] = field(default_factory=list)
    self_status: PeerStatus | None = None
    magic_dns_suffix: str = ""
    cert_domains: list[str] = field(default_factory=list)
    peers: dict[str, PeerStatus] = field(default_factory=dict)
    users: dict[str, UserProfile] = field(default_factory=dict)
    raw: JsonObject = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: Any) -> "Status":
        obj = _expect_object(data, "Status")
        self_node = _field(obj, "Self", dict, None)
        return cls(
            backend_state=_required(obj, "BackendState", str),
            version=_field(obj, "Version", str, ""),
            auth_url=_field(obj, "AuthURL", str, ""),
            tailscale_ips=_string_list(obj, "TailscaleIPs"),
            self_status=PeerStatus.from_dict(self_node) if self_node is not None else None,
            magic_dns_suffix=_field(obj, "MagicDNSSuffix", str, ""),
            cert_domains=_string_list(obj, "CertDomains"),
            peers=_object_map(obj, "Peer", PeerStatus.from_dict),
            users=_object_map(obj, "User", UserProfile.from_dict),
            raw=obj,
        )


@dataclass(frozen=True)
class Node:
    id: int | None = None
    stable_id: str = ""
    name: str = ""
    user: int | None = None
    addresses: list[str] = field(default_factory=list)
    computed_name: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "Node":
        obj = _expect_object(data, "Node")
        return cls(
            id=_field(obj, "ID", int, None),
            stable_id=_field(obj, "StableID", str, ""),
            name=_field(obj, "Name", str, ""),
            user=_field(obj, "User", int, None),
            addresses=_string_list(obj, "Addresses"),
            computed_name=_field(obj, "ComputedName", str, ""),
        )


@dataclass(frozen=True)
class Whois:
    node: Node
    user_profile: UserProfile
    raw: JsonObject = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: Any) -> "Whois":
        obj = _expect_object(data, "Whois")
        return cls(
            node=Node.from_dict(_required(obj, "Node", dict)),
            user_profile=UserProfile.from_dict(_required(obj, "UserProfile", dict)),
            raw=obj,
        )


def _expect_object(data: Any, name: str) -> JsonObject:
    if not isinstance(data, dict):
        raise ParseError(f"{name} must be a JSON object, got {type(data).__name__}")
    return data


def _check(value: Any, key: str, kind: type) -> Any:
    # bool is an int subclass; JSON booleans are not numbers
    if kind is int and isinstance(value, bool):
        raise ParseError(f"Field {key!r} must be {kind.__name__}, got bool")
    if not isinstance(value, kind):
        raise ParseError(f"Field {key!r} must be {kind.__name__}, got {type(value).__name__}")
    return value


def _field(obj: JsonObject, key: str, kind: type, default: Any) -> Any:
    value = obj.get(key, _MISSING)
    if value is _MISSING or value is None:
        return default
    return _check(value, key, kind)


def _required(obj: JsonObject, key: str, kind: type) -> Any:
    if obj.get(key) is None:
        raise ParseError(f"Missing required field {key!r}")
    return _check(obj[key], key, kind)


def _string_list(obj: JsonObject, key: str) -> list[str]:
    values = _field(obj, key, list, [])
    for value in values:
        _check(value, key, str)
    return list(values)


def _object_map(obj: JsonObject, key: str, factory: Callable[[Any], T]) -> dict[str, T]:
    entries = _field(obj, key, dict, {})
    return {name: factory(value) for name, value in entries.items()}


__all__ = [
    "Certificate",
    "JsonObject",
    "KeyEncoding",
    "Node",
    "PeerStatus",
    "PrivateKey",
    "Status",
    "UserProfile",
    "Whois",
]
