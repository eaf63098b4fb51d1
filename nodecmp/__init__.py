"""
Node Compare - Common peers across snapshots and their versions

A small library for finding the peers listed in every one of several
peer-list snapshots and probing which of them are reachable.

Usage Examples:

# Full run, reachable peers are printed as "address -> version"
from nodecmp import compare_nodes
results = compare_nodes(["a.json", "b.json", "c.json"], timeout=5)

# Step by step
from nodecmp import NodeComparer
comparer = NodeComparer(timeout=0.5)
common = comparer.common_peers(["a.json", "b.json"])
results = comparer.probe_versions(common)
"""

from .comparison import NodeComparer, ProbeResult, compare_nodes
from .comparison_components.intersector import intersect, intersect_all
from .comparison_components.snapshot_loader import PeerEntry, load_snapshot, read_snapshot
from .comparison_components.version_probe import VersionProbe, probe_version
from .core.errors import (
    ConfigError,
    DecodeError,
    InputError,
    MetadataError,
    NodecmpError,
    ProbeError,
)

__version__ = "0.1.0"
__all__ = [
    "NodeComparer",
    "ProbeResult",
    "compare_nodes",
    "intersect",
    "intersect_all",
    "PeerEntry",
    "load_snapshot",
    "read_snapshot",
    "VersionProbe",
    "probe_version",
    "NodecmpError",
    "InputError",
    "MetadataError",
    "DecodeError",
    "ProbeError",
    "ConfigError",
]
