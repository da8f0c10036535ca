import pytest

from msfusion.distort_config import MSF_DISTORT_MISC, DistortConfig, ParamDescription


def test_default_enables_both():
    config = DistortConfig.default()
    assert config.publish_pose is True
    assert config.publish_position is True


def test_bounds():
    assert DistortConfig.minimum() == DistortConfig(False, False)
    assert DistortConfig.maximum() == DistortConfig(True, True)


def test_param_descriptions():
    names = [p.name for p in DistortConfig.param_descriptions()]
    assert names == ["publish_pose", "publish_position"]
    for param in DistortConfig.param_descriptions():
        assert param.type == "bool"
        assert param.level == MSF_DISTORT_MISC
    assert DistortConfig.param_descriptions()[0].description == "enable pose republishing"


@pytest.mark.parametrize(
    "config",
    [DistortConfig(True, True), DistortConfig(False, True), DistortConfig(False, False)],
)
def test_clamped_keeps_values_within_bounds(config):
    assert config.clamped() == config


def test_level_equal_is_zero():
    assert DistortConfig.default().level(DistortConfig.default()) == 0


def test_level_changed_uses_param_level():
    changed = DistortConfig(publish_pose=False, publish_position=True)
    assert changed.level(DistortConfig.default()) == MSF_DISTORT_MISC
    both = DistortConfig(False, False)
    assert both.level(DistortConfig.default()) == MSF_DISTORT_MISC


@pytest.mark.parametrize(
    "config",
    [DistortConfig(True, False), DistortConfig(False, True), DistortConfig(False, False)],
)
def test_message_round_trip(config):
    assert DistortConfig.from_message(config.to_message()) == config


def test_to_message_layout():
    message = DistortConfig(True, False).to_message()
    assert message["bools"] == [
        {"name": "publish_pose", "value": True},
        {"name": "publish_position", "value": False},
    ]
    assert message["ints"] == [] and message["doubles"] == [] and message["strs"] == []
    assert message["groups"][0]["name"] == "Default"


def test_missing_param_keeps_default():
    message = {"bools": [{"name": "publish_pose", "value": False}]}
    config = DistortConfig.from_message(message)
    assert config == DistortConfig(publish_pose=False, publish_position=True)


def test_unknown_param_raises():
    message = {"bools": [{"name": "unknown", "value": True}]}
    with pytest.raises(ValueError):
        DistortConfig.from_message(message)


def test_param_in_wrong_section_raises():
    message = {"ints": [{"name": "publish_pose", "value": 0}]}
    with pytest.raises(ValueError):
        DistortConfig.from_message(message)


def test_param_description_section():
    param = ParamDescription("x", "double", 1, "d")
    assert param.section == "doubles"


def test_as_dict():
    assert DistortConfig(False, True).as_dict() == {
        "publish_pose": False,
        "publish_position": True,
    }