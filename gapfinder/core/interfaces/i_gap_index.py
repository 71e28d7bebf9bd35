# gapfinder/core/interfaces/i_gap_index.py

from abc import ABC, abstractmethod
from typing import Dict, Iterable, List
from gapfinder.core.models.block_link import BlockLink
from gapfinder.core.models.chain_segment import ChainSegment

class IGapIndex(ABC):
    """
    Contrato de un índice incremental de tramos.

    Permite que el reporte, el analizador por lotes y la API trabajen con el índice
    sin depender de cómo resuelve los enlaces internamente.
    """

    @property
    @abstractmethod
    def total_blocks(self) -> int:
        """Cantidad total de bloques recibidos por append()."""
        pass

    @property
    @abstractmethod
    def took(self) -> float:
        """Segundos acumulados procesando lotes."""
        pass

    @abstractmethod
    def append(self, blocks: Iterable[BlockLink]) -> None:
        """
        Procesa un lote de bloques y fusiona los tramos que queden adyacentes.

        Raises:
            CycleDetectedError: Si un tramo se cierra sobre sí mismo.
            ForkDetectedError: Si dos bloques reclaman el mismo previo.
        """
        pass

    @abstractmethod
    def chains(self) -> Dict[str, ChainSegment]:
        """Copia del mapa gap_hash -> tramo."""
        pass

    @abstractmethod
    def chains_as_list(self) -> List[ChainSegment]:
        pass
