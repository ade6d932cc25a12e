"""Exceptions raised by the Sesame reporter."""

from typing import Optional


class SesameReporterException(Exception):
    """Base exception for the Sesame reporter."""

    pass


class ConfigurationError(SesameReporterException):
    """Device map or credentials are unusable."""

    pass


class DeviceStatusError(SesameReporterException):
    """Fetching or parsing one device's status failed."""

    def __init__(self, message: str, device_uuid: Optional[str] = None):
        super().__init__(message)
        self.device_uuid = device_uuid


class NotificationError(SesameReporterException):
    """The LINE push request could not be delivered to the API at all."""

    pass
