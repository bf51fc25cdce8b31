from __future__ import annotations


class ADSoftError(Exception):
    """Base class for service errors."""


class ConfigurationError(ADSoftError):
    """Startup precondition failed; the application must not start."""


class CipherError(ADSoftError):
    """Symmetric cipher operation failed."""

    def __init__(self, operation: str, reason: str = "") -> None:
        self.operation = operation
        self.reason = reason
        msg = f"{operation} failed"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class DecryptionFailure(CipherError):
    """Ciphertext is not base64, has a bad block length or padding.

    The message names the operation and the reason only, never the input.
    """

    def __init__(self, reason: str = "") -> None:
        super().__init__("decrypt", reason)


class AttributeReadFailure(ADSoftError):
    """One directory attribute could not be read or converted."""

    def __init__(self, attribute: str, reason: str = "") -> None:
        self.attribute = attribute
        self.reason = reason
        msg = f"cannot read attribute {attribute}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class UpstreamDirectoryError(ADSoftError):
    """Directory gateway failed (bind, search or transport)."""
