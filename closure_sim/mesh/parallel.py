"""Communicators for bulk exchanges between ranks.

``SerialCommunicator`` is the single-rank case. ``InProcessWorld`` simulates a
run of several ranks inside one process, one thread per rank, which is how
redistribution is exercised without an MPI launcher. Payloads are pickled on
send so ranks never share mutable state, as they would not across processes.
"""

from __future__ import annotations

import pickle
import threading
from typing import Any, Dict, List, Mapping

from ..constants import EXCHANGE_TIMEOUT_S
from ..logging import ComponentType, get_component_logger
from ..utils.exceptions import CommunicationError, ValidationError

__all__ = ["SerialCommunicator", "InProcessWorld", "InProcessCommunicator"]

logger = get_component_logger("parallel", ComponentType.MESH)


def _check_destinations(outgoing: Mapping[int, Any], size: int) -> None:
    for rank in outgoing:
        if not 0 <= int(rank) < size:
            raise ValidationError(
                f"Cannot send to rank {rank} in a run of {size} rank(s)",
                parameter_name="outgoing",
                parameter_value=rank,
                expected_format=f"destination ranks 0..{size - 1}",
            )


class SerialCommunicator:
    rank = 0
    size = 1

    def exchange(self, outgoing: Mapping[int, Any]) -> Dict[int, Any]:
        _check_destinations(outgoing, self.size)
        if 0 in outgoing:
            return {0: pickle.loads(pickle.dumps(outgoing[0]))}
        return {}

    def __repr__(self) -> str:
        return "SerialCommunicator()"


class InProcessWorld:
    """Shared mailboxes of a simulated multi-rank run.

    Args:
        size: Number of ranks
        timeout: Seconds a rank waits for the others to join an exchange

    Example:
        >>> world = InProcessWorld(2)
        >>> comms = [world.communicator(rank) for rank in range(2)]
        >>> # run one thread per communicator; each calls comm.exchange(...)
    """

    def __init__(self, size: int, timeout: float = EXCHANGE_TIMEOUT_S):
        if size < 1:
            raise ValidationError(
                "A run needs at least one rank",
                parameter_name="size",
                parameter_value=size,
                expected_format="positive integer",
            )
        self.size = size
        self.timeout = timeout
        self._lock = threading.Lock()
        self._barrier = threading.Barrier(size, timeout=timeout)
        self._mailboxes: List[Dict[int, bytes]] = [{} for _ in range(size)]

    def communicator(self, rank: int) -> "InProcessCommunicator":
        if not 0 <= rank < self.size:
            raise ValidationError(
                f"Rank {rank} is outside a run of {self.size} rank(s)",
                parameter_name="rank",
                parameter_value=rank,
            )
        return InProcessCommunicator(self, rank)

    def _wait(self, rank: int) -> None:
        try:
            self._barrier.wait()
        except threading.BrokenBarrierError as exc:
            raise CommunicationError(
                f"Rank {rank} gave up waiting for the other ranks after {self.timeout}s",
                rank=rank,
            ) from exc

    def _exchange(self, rank: int, outgoing: Mapping[int, Any]) -> Dict[int, Any]:
        _check_destinations(outgoing, self.size)
        with self._lock:
            for dest, payload in outgoing.items():
                self._mailboxes[int(dest)][rank] = pickle.dumps(payload)
        self._wait(rank)
        with self._lock:
            inbox = self._mailboxes[rank]
            self._mailboxes[rank] = {}
        # nobody may post the next round before everyone has read this one
        self._wait(rank)
        return {src: pickle.loads(inbox[src]) for src in sorted(inbox)}


class InProcessCommunicator:
    """Rank-local handle on an :class:`InProcessWorld`."""

    def __init__(self, world: InProcessWorld, rank: int):
        self.world = world
        self.rank = rank
        self.size = world.size

    def exchange(self, outgoing: Mapping[int, Any]) -> Dict[int, Any]:
        received = self.world._exchange(self.rank, outgoing)
        logger.debug(
            "Rank %d sent to %s, received from %s",
            self.rank,
            sorted(outgoing),
            sorted(received),
        )
        return received

    def __repr__(self) -> str:
        return f"InProcessCommunicator(rank={self.rank}, size={self.size})"
