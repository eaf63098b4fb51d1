"""
Error types for Node Compare

Every error kind carries a fixed label and the underlying cause. Loader and
configuration errors are fatal to a run; probe errors only ever affect the
single peer they were raised for.
"""

from typing import Optional


class NodecmpError(Exception):
    """Base class for all nodecmp errors"""

    label = "error: "

    def __init__(self, cause):
        self.cause = cause
        super().__init__(f"{self.label}{cause}")


class InputError(NodecmpError):
    """A snapshot could not be opened or read"""

    label = "provided args are invalid: "


class MetadataError(NodecmpError):
    """A snapshot ended before its three metadata lines"""

    label = "error while reading metadata: "


class DecodeError(NodecmpError):
    """A snapshot payload is not a JSON array of peer entries"""

    label = "error while decoding entries: "


class ConfigError(NodecmpError):
    """A configuration file or value is invalid"""

    label = "invalid configuration: "


class ProbeError(NodecmpError):
    """The version handshake with a single peer failed"""

    label = "error while getting version from host: "

    def __init__(self, cause, address: Optional[str] = None):
        self.address = address
        super().__init__(cause)
