from typing import Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, field_validator


class Device(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    name: str
    uuid: str

    @field_validator("name", "uuid")
    @classmethod
    def validate_not_blank(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError("must not be empty")
        return normalized


class DeviceStatus(BaseModel):
    """Subset of the Sesame status payload used in reports.

    Types are strict: ``"yes"``, ``1`` or ``true`` in the wrong field are
    rejected instead of being coerced into a plausible-looking report.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    locked: StrictBool
    battery_percentage: Union[StrictInt, StrictFloat] = Field(alias="batteryPercentage")
