import pytest

from sesame_reporter.core.exceptions import ConfigurationError
from sesame_reporter.infrastructure.config.device_config import load_devices


def test_load_devices_keeps_configuration_order():
    raw = {
        "z": {"name": "Zeta", "uuid": "uuid-z"},
        "a": {"name": "Alpha", "uuid": "uuid-a"},
        "m": {"name": "Mid", "uuid": "uuid-m"},
    }

    devices = load_devices(raw)

    assert [d.key for d in devices] == ["z", "a", "m"]
    assert devices[0].name == "Zeta"
    assert devices[0].uuid == "uuid-z"


def test_load_devices_empty_map():
    assert load_devices({}) == []


def test_load_devices_strips_whitespace():
    devices = load_devices({"1": {"name": " Door ", "uuid": " abc "}})

    assert devices[0].name == "Door"
    assert devices[0].uuid == "abc"


def test_missing_uuid_is_configuration_error():
    with pytest.raises(ConfigurationError, match="uuid"):
        load_devices({"front": {"name": "Front Door"}})


def test_non_object_entry_is_configuration_error():
    with pytest.raises(ConfigurationError, match="key=front"):
        load_devices({"front": "uuid-front"})


def test_non_mapping_root_is_configuration_error():
    with pytest.raises(ConfigurationError):
        load_devices(["front"])
