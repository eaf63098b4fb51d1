"""
Node Compare - Common peers across snapshots and their versions

Loads several peer-list snapshots, keeps the peers present in all of them
and asks each of those peers for its version concurrently.
Supports both programmatic and CLI usage.
"""

import sys
import time
import threading
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, asdict
from typing import Any, Dict, Iterable, List, Optional, TextIO

from .core.errors import ProbeError
from .comparison_components.intersector import intersect_all
from .comparison_components.snapshot_loader import PeerSet, load_snapshot
from .comparison_components.version_probe import (
    DEFAULT_CLIENT_VERSION,
    DEFAULT_MAX_VERSION_LENGTH,
    VersionProbe,
)

# Configure logger for this module
logger = logging.getLogger(__name__)


@dataclass
class ProbeResult:
    """Outcome of probing a single peer"""
    address: str
    version: str
    ok: bool
    error: Optional[str] = None

    def line(self) -> str:
        """Output line for a reachable peer"""
        return f"{self.address} -> {self.version}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return asdict(self)


class NodeComparer:
    """Intersects snapshots and probes the common peers"""

    def __init__(self, timeout: float = 60.0,
                 client_version: str = DEFAULT_CLIENT_VERSION,
                 max_version_length: int = DEFAULT_MAX_VERSION_LENGTH,
                 output: Optional[TextIO] = None):
        """
        Initialize the comparer.

        Args:
            timeout: Seconds allowed for each connect and each read
            client_version: Version string announced to peers
            max_version_length: Largest server version accepted, in bytes
            output: Stream receiving one line per reachable peer (default stdout)
        """
        self.timeout = timeout
        self.output = output
        self.prober = VersionProbe(timeout=timeout,
                                   client_version=client_version,
                                   max_version_length=max_version_length)
        self._output_lock = threading.Lock()

    def common_peers(self, paths: Iterable[str]) -> PeerSet:
        """
        Load every snapshot and intersect them.

        Any loader error aborts immediately; no partial result is returned.
        """
        peer_sets = [load_snapshot(path) for path in paths]
        common = intersect_all(peer_sets)
        logger.info(f"{len(common)} peers common to {len(peer_sets)} snapshots")
        return common

    def probe_versions(self, addresses: Iterable[str]) -> List[ProbeResult]:
        """
        Probe every address concurrently, one worker per address.

        Each reachable peer is written to the output stream as soon as its
        probe completes. Failed probes are returned with ``ok=False`` and
        are not written.

        Returns:
            ProbeResults in completion order
        """
        addresses = list(addresses)
        if not addresses:
            logger.info("No candidate peers to probe")
            return []

        start_time = time.time()
        logger.info(f"Probing {len(addresses)} peers with timeout {self.timeout}s")

        results = []
        with ThreadPoolExecutor(max_workers=len(addresses)) as executor:
            futures = [executor.submit(self._probe_one, address) for address in addresses]
            for future in as_completed(futures):
                results.append(future.result())

        reachable = sum(1 for r in results if r.ok)
        logger.info(f"{reachable} of {len(results)} peers answered in "
                    f"{round(time.time() - start_time, 2)}s")
        return results

    def compare(self, paths: Iterable[str]) -> List[ProbeResult]:
        """Load, intersect and probe; returns every ProbeResult"""
        common = self.common_peers(paths)
        return self.probe_versions(common)

    def _probe_one(self, address: str) -> ProbeResult:
        try:
            version = self.prober.probe_version(address)
        except ProbeError as e:
            logger.debug(f"Probe failed for {address}: {e}")
            return ProbeResult(address=address, version="", ok=False, error=str(e))

        result = ProbeResult(address=address, version=version, ok=True)
        self._emit(result.line())
        return result

    def _emit(self, line: str) -> None:
        stream = self.output if self.output is not None else sys.stdout
        with self._output_lock:
            try:
                stream.write(line + "\n")
                stream.flush()
            except OSError as e:
                logger.debug(f"Could not write result line: {e}")


def compare_nodes(paths: Iterable[str], timeout: float = 60.0,
                  client_version: str = DEFAULT_CLIENT_VERSION,
                  output: Optional[TextIO] = None) -> List[Dict[str, Any]]:
    """
    Convenience function for a full comparison run.

    Args:
        paths: Snapshot file paths, at least two
        timeout: Network timeout in seconds
        client_version: Version string announced to peers
        output: Stream receiving reachable peers (default stdout)

    Returns:
        List of probe results as dictionaries
    """
    comparer = NodeComparer(timeout=timeout, client_version=client_version, output=output)
    return [result.to_dict() for result in comparer.compare(paths)]
