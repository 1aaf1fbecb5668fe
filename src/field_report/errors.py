"""Exceptions raised by the field report domain."""


class FieldReportError(Exception):
    pass


class StorageCorruptedError(FieldReportError):
    """A persisted slot could not be decoded."""

    def __init__(self, key: str, reason: str):
        super().__init__(f"stored value for '{key}' is unreadable: {reason}")
        self.key = key


class ImageTooLargeError(FieldReportError):
    def __init__(self, size: int, limit: int):
        super().__init__(f"image is {size} bytes, limit is {limit}")
        self.size = size
        self.limit = limit


class MissingContactError(FieldReportError):
    """No WhatsApp number is configured on the profile."""
