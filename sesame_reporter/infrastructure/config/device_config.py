from typing import Any, List, Mapping

from pydantic import ValidationError

from sesame_reporter.core.exceptions import ConfigurationError
from sesame_reporter.domain.device.device_model import Device


def load_devices(raw: Mapping[str, Any]) -> List[Device]:
    """Build the device list from the SESAME_DEVICES map, keeping its order."""
    if not isinstance(raw, Mapping):
        raise ConfigurationError("SESAME_DEVICES must be a JSON object")

    devices: List[Device] = []

    for key, value in raw.items():
        if not isinstance(value, Mapping):
            raise ConfigurationError(f"Device config for key={key} must be an object")

        try:
            devices.append(
                Device(key=str(key), name=value.get("name", ""), uuid=value.get("uuid", ""))
            )
        except ValidationError as exc:
            fields = ", ".join(str(err["loc"][0]) for err in exc.errors())
            raise ConfigurationError(
                f"Device config key={key} has invalid fields: {fields}"
            ) from exc

    return devices
