"""A relay that republishes pose and position measurements when enabled."""

from __future__ import annotations

import enum
import logging
from typing import Any, Callable, Iterable, Mapping

from msfusion.distort_config import DistortConfig

logger = logging.getLogger(__name__)

PUBLISH_QUEUE_SIZE = 100
SUBSCRIBE_QUEUE_SIZE = 20


class MessageKind(enum.Enum):
    """The measurement messages the relay handles, with their topics."""

    POSE_WITH_COVARIANCE = (
        "pose_with_covariance_input",
        "pose_with_covariance_output",
        True,
    )
    TRANSFORM = ("transform_input", "transform_output", True)
    POSE = ("pose_input", "pose_output", True)
    NAVSATFIX = ("navsatfix_input", "navsatfix_output", False)
    POINT = ("point_input", "point_output", False)

    def __init__(self, input_topic: str, output_topic: str, carries_pose: bool) -> None:
        self.input_topic = input_topic
        self.output_topic = output_topic
        self.carries_pose = carries_pose


Publisher = Callable[[Any], None]


class MeasurementRelay:
    """Passes messages on to their publisher unless switched off by the configuration."""

    def __init__(self, publishers: Mapping[MessageKind, Publisher]) -> None:
        missing = [kind.name for kind in MessageKind if kind not in publishers]
        if missing:
            raise ValueError(f"no publisher for: {', '.join(missing)}")
        self._publishers = dict(publishers)
        self._config = DistortConfig.default()

    @property
    def config(self) -> DistortConfig:
        """The configuration in effect."""
        return self._config

    def configure(self, config: DistortConfig) -> None:
        """Replace the configuration."""
        self._config = config

    def handle(self, kind: MessageKind, message: Any) -> bool:
        """Republish ``message`` if its kind is enabled; return whether it was."""
        enabled = (
            self._config.publish_pose if kind.carries_pose else self._config.publish_position
        )
        if enabled:
            self._publishers[kind](message)
        return enabled


def topic_summary(node_name: str, subscribed: Iterable[str], advertised: Iterable[str]) -> str:
    """Return the listing of subscribed and advertised topics of a node."""
    lines = [f"{node_name}:\n", "\tsubscribed to topics:\n"]
    lines.extend(f"\t\t{topic}\n" for topic in subscribed)
    lines.append("\tadvertised topics:\n")
    lines.extend(f"\t\t{topic}\n" for topic in advertised)
    return "".join(lines)