#!/usr/bin/env python3
"""
Records returned by power-profiles-daemon.

The daemon describes profiles, actions and holds as a{sv} dictionaries.
dasbus hands them over with the variants already unpacked; this module
turns each dictionary into a frozen dataclass, so callers never look up
D-Bus keys by hand.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ppd.errors import TransportError

Structure = Dict[str, Any]


def _require(structure: Structure, key: str, kind: type) -> Any:
    if not isinstance(structure, dict):
        raise TransportError(f"Malformed reply: expected a dictionary, got {type(structure).__name__}")
    if key not in structure:
        raise TransportError(f"Malformed reply: missing key '{key}'")
    value = structure[key]
    if not isinstance(value, kind):
        raise TransportError(f"Malformed reply: '{key}' is not of type {kind.__name__}")
    return value


def _optional(structure: Structure, key: str) -> Optional[str]:
    value = structure.get(key)
    return str(value) if value else None


@dataclass(frozen=True)
class Profile:
    """A power profile and the drivers implementing it."""
    profile: str
    driver: str
    platform_driver: Optional[str] = None
    cpu_driver: Optional[str] = None

    @property
    def name(self) -> str:
        return self.profile

    @classmethod
    def from_structure(cls, structure: Structure) -> "Profile":
        return cls(
            profile=_require(structure, "Profile", str),
            driver=_require(structure, "Driver", str),
            platform_driver=_optional(structure, "PlatformDriver"),
            cpu_driver=_optional(structure, "CpuDriver"),
        )


@dataclass(frozen=True)
class Action:
    """A toggleable daemon-side behaviour."""
    name: str
    description: str
    enabled: bool

    @classmethod
    def from_structure(cls, structure: Structure) -> "Action":
        name = _require(structure, "Name", str)
        return cls(
            name=name,
            description=_optional(structure, "Description") or "",
            enabled=_require(structure, "Enabled", bool),
        )


@dataclass(frozen=True)
class ActiveHold:
    """A profile hold requested by an application."""
    application_id: str
    reason: str
    profile: str

    @classmethod
    def from_structure(cls, structure: Structure) -> "ActiveHold":
        return cls(
            application_id=_require(structure, "ApplicationId", str),
            reason=_require(structure, "Reason", str),
            profile=_require(structure, "Profile", str),
        )


def decode_list(kind: type, value: Any) -> List[Any]:
    """
    Decode an aa{sv} property value into a list of records.

    Args:
        kind: One of Profile, Action or ActiveHold
        value: The unpacked property value

    Returns:
        A list of kind instances, in the order the daemon sent them

    Raises:
        TransportError: If the value is not a list of dictionaries
    """
    if not isinstance(value, (list, tuple)):
        raise TransportError(f"Malformed reply: expected a list, got {type(value).__name__}")
    return [kind.from_structure(item) for item in value]
