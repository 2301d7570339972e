import attrs

from src.service.device_loan.domain.entity.device_entity import Device


@attrs.define(frozen=True)
class EmailContent:
    subject: str
    body: str


def build_device_available_email(*, device: Device) -> EmailContent:
    subject = f'Device Available: {device.brand} {device.model}'
    body = (
        'Hello,\n'
        '\n'
        'Great news! The device you requested is now available for reservation.\n'
        '\n'
        'Device Details:\n'
        f'- Brand: {device.brand}\n'
        f'- Model: {device.model}\n'
        '\n'
        'Please log in to the Campus Device Loan System to reserve this device '
        "before it's claimed by someone else.\n"
        '\n'
        'Best regards,\n'
        'Campus Device Loan System'
    )
    return EmailContent(subject=subject, body=body)
