# gapfinder/core/models/chain_segment.py

from typing import Dict, Any

from gapfinder.core.models.block_link import BlockLink

class ChainSegment:
    """
    Tramo contiguo de bloques conocido hasta ahora.
    Solo guarda los extremos (head = más antiguo, tail = más reciente) y la longitud,
    nunca los bloques intermedios.
    """

    def __init__(self, head: BlockLink, tail: BlockLink, length: int = 1) -> None:
        self.head = head
        self.tail = tail
        self.length = length

    @property
    def gap_hash(self) -> str:
        # Hash que el tramo espera recibir para crecer hacia atrás
        return self.head.prev_hash

    def to_dict(self) -> Dict[str, Any]:
        return {
            "gap_hash": self.gap_hash,
            "length": self.length,
            "head_hash": self.head.block_hash,
            "head_timestamp": self.head.timestamp,
            "tail_hash": self.tail.block_hash,
            "tail_timestamp": self.tail.timestamp
        }

    def __repr__(self) -> str:
        return (
            f"ChainSegment(head={self.head.block_hash!r}, "
            f"tail={self.tail.block_hash!r}, length={self.length})"
        )
