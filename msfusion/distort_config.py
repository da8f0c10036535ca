"""Runtime-reconfigurable switches for the measurement relay."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Mapping

MSF_DISTORT_MISC = 1
"""Reconfiguration level shared by all relay parameters."""

_SECTIONS = ("bools", "ints", "doubles", "strs")
_SECTION_FOR_TYPE = {"bool": "bools", "int": "ints", "double": "doubles", "str": "strs"}
_DEFAULT_GROUP = {"name": "Default", "state": True, "id": 0, "parent": 0}


@dataclass(frozen=True)
class ParamDescription:
    """Static description of one reconfigurable parameter."""

    name: str
    type: str
    level: int
    description: str
    edit_method: str = ""

    @property
    def section(self) -> str:
        """The message section that carries values of this parameter."""
        return _SECTION_FOR_TYPE[self.type]


_PARAMS = (
    ParamDescription("publish_pose", "bool", MSF_DISTORT_MISC, "enable pose republishing"),
    ParamDescription(
        "publish_position", "bool", MSF_DISTORT_MISC, "enable position republishing"
    ),
)


@dataclass(frozen=True)
class DistortConfig:
    """Which kinds of measurement the relay passes on."""

    publish_pose: bool = True
    publish_position: bool = True

    @classmethod
    def default(cls) -> DistortConfig:
        """Return the default configuration."""
        return cls(publish_pose=True, publish_position=True)

    @classmethod
    def maximum(cls) -> DistortConfig:
        """Return the upper bounds of all parameters."""
        return cls(publish_pose=True, publish_position=True)

    @classmethod
    def minimum(cls) -> DistortConfig:
        """Return the lower bounds of all parameters."""
        return cls(publish_pose=False, publish_position=False)

    @classmethod
    def param_descriptions(cls) -> tuple[ParamDescription, ...]:
        """Return the descriptions of all parameters, in declaration order."""
        return _PARAMS

    def clamped(self) -> DistortConfig:
        """Return a copy with every parameter limited to its bounds."""
        upper, lower = self.maximum(), self.minimum()
        changes: dict[str, Any] = {}
        for param in _PARAMS:
            value = getattr(self, param.name)
            if value > getattr(upper, param.name):
                value = getattr(upper, param.name)
            if value < getattr(lower, param.name):
                value = getattr(lower, param.name)
            changes[param.name] = value
        return replace(self, **changes)

    def level(self, other: DistortConfig) -> int:
        """Return the OR of the levels of all parameters that differ from ``other``."""
        combined = 0
        for param in _PARAMS:
            if getattr(self, param.name) != getattr(other, param.name):
                combined |= param.level
        return combined

    @classmethod
    def from_message(cls, message: Mapping[str, Any]) -> DistortConfig:
        """Build a configuration from a reconfigure message.

        Parameters missing from the message keep their default value. A message
        that carries any parameter this configuration does not know raises
        ``ValueError``.
        """
        sections = {
            section: {entry["name"]: entry["value"] for entry in message.get(section, ())}
            for section in _SECTIONS
        }
        values: dict[str, Any] = {}
        for param in _PARAMS:
            section = sections[param.section]
            if param.name in section:
                values[param.name] = bool(section[param.name])
        total = sum(len(message.get(section, ())) for section in _SECTIONS)
        if len(values) != total:
            listing = "; ".join(
                f"{section}: "
                + ", ".join(entry["name"] for entry in message.get(section, ()))
                for section in _SECTIONS
            )
            raise ValueError(f"configuration message has an unexpected parameter ({listing})")
        return replace(cls.default(), **values)

    def to_message(self) -> dict[str, list[dict[str, Any]]]:
        """Return the configuration as a reconfigure message."""
        message: dict[str, list[dict[str, Any]]] = {section: [] for section in _SECTIONS}
        for param in _PARAMS:
            message[param.section].append(
                {"name": param.name, "value": getattr(self, param.name)}
            )
        message["groups"] = [dict(_DEFAULT_GROUP)]
        return message

    def as_dict(self) -> dict[str, Any]:
        """Return the parameter values keyed by name."""
        return {f.name: getattr(self, f.name) for f in fields(self)}