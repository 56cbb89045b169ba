from enum import StrEnum


class DialogState(StrEnum):
    idle = "idle"
    generating_tags = "generating_tags"
    uploading = "uploading"


class DeliveryStatus(StrEnum):
    delivered = "delivered"
    failed = "failed"
