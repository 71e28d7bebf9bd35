# gapfinder/core/models/block_link.py

from typing import Dict, Any, Optional
import logging

logger = logging.getLogger(__name__)

class BlockLink:
    """
    Eslabón mínimo de una cadena: su propio hash y el hash del bloque previo.
    El timestamp es opcional y solo se usa para mostrar resultados.
    """

    def __init__(
        self,
        block_hash: str,
        prev_hash: str,
        timestamp: Optional[int] = None
    ) -> None:
        self._block_hash = block_hash
        self._prev_hash = prev_hash
        self._timestamp = timestamp

    # --- Getters ---
    @property
    def block_hash(self) -> str: return self._block_hash
    @property
    def hash(self) -> str: return self._block_hash
    @property
    def prev_hash(self) -> str: return self._prev_hash
    @property
    def timestamp(self) -> Optional[int]: return self._timestamp

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hash": self._block_hash,
            "prev_hash": self._prev_hash,
            "timestamp": self._timestamp
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BlockLink':
        """
        Acepta el formato plano ({hash, prev_hash}) y el formato de bloque
        del nodo ({header: {hash, previous_hash, timestamp}}).
        """
        if not isinstance(data, dict):
            raise ValueError(f"Bloque con formato inválido: {data!r}")

        if "header" in data and isinstance(data["header"], dict):
            data = data["header"]

        block_hash = data.get("hash", data.get("block_hash"))
        prev_hash = data.get("prev_hash", data.get("previous_hash"))

        if block_hash is None or prev_hash is None:
            raise ValueError(f"Bloque sin 'hash' o 'prev_hash': {data}")

        timestamp = data.get("timestamp")
        return cls(
            block_hash=str(block_hash),
            prev_hash=str(prev_hash),
            timestamp=int(timestamp) if timestamp is not None else None
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BlockLink):
            return NotImplemented
        return self._block_hash == other._block_hash and self._prev_hash == other._prev_hash

    def __hash__(self) -> int:
        return hash((self._block_hash, self._prev_hash))

    def __repr__(self) -> str:
        return f"BlockLink({self._block_hash!r} <- {self._prev_hash!r})"
