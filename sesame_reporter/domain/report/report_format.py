from typing import Iterable

from sesame_reporter.domain.device.device_model import Device, DeviceStatus

REPORT_HEADER = "Sesame状態レポート"
FALLBACK_MESSAGE = "Sesame状態の取得中にエラーが発生しました。"
FRAGMENT_SEPARATOR = "\n\n"

LOCKED_TEXT = {True: "はい", False: "いいえ"}


def format_battery(value: float) -> str:
    # 87.0 -> "87", matching how the API's JSON numbers read.
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def format_device_status(device: Device, status: DeviceStatus) -> str:
    return (
        f"{device.name}の状態:\n"
        f"施錠: {LOCKED_TEXT[status.locked]}\n"
        f"バッテリー: {format_battery(status.battery_percentage)}%"
    )


def compose_report(fragments: Iterable[str]) -> str:
    return REPORT_HEADER + FRAGMENT_SEPARATOR + FRAGMENT_SEPARATOR.join(fragments)
