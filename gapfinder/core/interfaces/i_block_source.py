# gapfinder/core/interfaces/i_block_source.py

from abc import ABC, abstractmethod
from typing import Iterator, List
from gapfinder.core.models.block_link import BlockLink

class IBlockSource(ABC):
    """
    Contrato de cualquier origen de bloques (archivo JSON, base de datos del nodo, etc.).
    """

    @abstractmethod
    def iter_batches(self, batch_size: int) -> Iterator[List[BlockLink]]:
        """
        Entrega los bloques en lotes de como máximo batch_size elementos.
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        pass
