import pytest

from msfusion.distort_config import DistortConfig
from msfusion.relay import MeasurementRelay, MessageKind, topic_summary


def _relay():
    published = []

    def make(kind):
        return lambda message: published.append((kind, message))

    relay = MeasurementRelay({kind: make(kind) for kind in MessageKind})
    return relay, published


def test_default_config_publishes_everything():
    relay, published = _relay()
    messages = {kind: object() for kind in MessageKind}
    results = [relay.handle(kind, msg) for kind, msg in messages.items()]
    assert all(results)
    assert published == list(messages.items())


def test_disabling_pose_blocks_only_pose_kinds():
    relay, published = _relay()
    relay.configure(DistortConfig(publish_pose=False, publish_position=True))
    for kind in MessageKind:
        relay.handle(kind, kind.name)
    assert [kind for kind, _ in published] == [MessageKind.NAVSATFIX, MessageKind.POINT]


def test_disabling_position_blocks_only_position_kinds():
    relay, published = _relay()
    relay.configure(DistortConfig(publish_pose=True, publish_position=False))
    assert relay.handle(MessageKind.POINT, "p") is False
    assert relay.handle(MessageKind.POSE, "q") is True
    assert published == [(MessageKind.POSE, "q")]


def test_message_is_passed_unchanged():
    relay, published = _relay()
    message = {"x": 1.0}
    relay.handle(MessageKind.TRANSFORM, message)
    assert published[0][1] is message


def test_missing_publisher_raises():
    with pytest.raises(ValueError):
        MeasurementRelay({MessageKind.POSE: lambda message: None})


def test_topic_summary_format():
    text = topic_summary(
        "/msf_distort",
        [MessageKind.POINT.input_topic],
        [MessageKind.POINT.output_topic],
    )
    assert text == (
        "/msf_distort:\n\tsubscribed to topics:\n\t\tpoint_input\n"
        "\tadvertised topics:\n\t\tpoint_output\n"
    )


def test_topic_summary_empty_lists():
    assert topic_summary("n", [], []) == "n:\n\tsubscribed to topics:\n\tadvertised topics:\n"