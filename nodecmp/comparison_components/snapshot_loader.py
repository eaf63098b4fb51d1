"""
Snapshot Loader - Parse peer-list snapshot files

A snapshot holds three metadata lines followed by a JSON array of peer
entries. Only the array is interpreted; the metadata lines are skipped.
"""

import json
import logging
from dataclasses import dataclass
from typing import BinaryIO, Dict, List

from ..core.errors import DecodeError, InputError, MetadataError

logger = logging.getLogger(__name__)

METADATA_LINES = 3

# address -> outbound flag
PeerSet = Dict[str, bool]


@dataclass(frozen=True)
class PeerEntry:
    """Single peer as recorded in a snapshot"""
    address: str
    outbound: bool

    @classmethod
    def from_json(cls, obj) -> "PeerEntry":
        """Build an entry from a decoded JSON object"""
        if not isinstance(obj, dict):
            raise DecodeError(f"expected an object, got {type(obj).__name__}")
        address = obj.get('netaddress')
        outbound = obj.get('wasoutboundpeer')
        if not isinstance(address, str):
            raise DecodeError(f"netaddress must be a string, got {address!r}")
        if not isinstance(outbound, bool):
            raise DecodeError(f"wasoutboundpeer must be a boolean, got {outbound!r}")
        return cls(address=address, outbound=outbound)


def skip_metadata(stream: BinaryIO, count: int = METADATA_LINES) -> None:
    """Discard the leading metadata lines, requiring a terminator on each"""
    for i in range(count):
        try:
            line = stream.readline()
        except OSError as e:
            raise InputError(e) from e
        if not line.endswith(b'\n'):
            raise MetadataError(f"expected {count} metadata lines, found {i}")


def decode_entries(payload: bytes) -> List[PeerEntry]:
    """Decode the JSON array that follows the metadata"""
    try:
        text = payload.decode('utf-8')
    except UnicodeDecodeError as e:
        raise DecodeError(e) from e

    # Only the first JSON value is read; anything after it is ignored.
    decoder = json.JSONDecoder()
    text = text.lstrip()
    try:
        data, _ = decoder.raw_decode(text)
    except json.JSONDecodeError as e:
        raise DecodeError(e) from e

    if not isinstance(data, list):
        raise DecodeError(f"expected a JSON array, got {type(data).__name__}")
    return [PeerEntry.from_json(obj) for obj in data]


def read_snapshot(stream: BinaryIO) -> PeerSet:
    """
    Parse a snapshot from a readable byte stream.

    Args:
        stream: Binary stream positioned at the start of the snapshot

    Returns:
        PeerSet mapping each address to its outbound flag

    Raises:
        InputError: The stream could not be read
        MetadataError: Fewer than three metadata lines are present
        DecodeError: The payload is not an array of peer entries
    """
    skip_metadata(stream)
    try:
        payload = stream.read()
    except OSError as e:
        raise InputError(e) from e

    peers = {}
    for entry in decode_entries(payload):
        peers[entry.address] = entry.outbound
    return peers


def load_snapshot(path: str) -> PeerSet:
    """Open a snapshot file and parse it"""
    logger.debug(f"Loading snapshot {path}")
    try:
        f = open(path, 'rb')
    except OSError as e:
        raise InputError(e) from e
    with f:
        peers = read_snapshot(f)
    logger.debug(f"Loaded {len(peers)} peers from {path}")
    return peers
