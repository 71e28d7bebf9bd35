# gapfinder/core/services/gaps_analyzer.py

import logging
from typing import Iterable, Optional

from gapfinder.core.interfaces.i_block_source import IBlockSource
from gapfinder.core.interfaces.i_gap_index import IGapIndex
from gapfinder.core.services.gaps_report import GapsResult
from gapfinder.core.config.config_manager import ConfigManager

logger = logging.getLogger(__name__)

class GapsAnalyzer:
    """
    Alimenta un índice de tramos con los lotes de uno o varios orígenes, en orden.
    Los errores de estructura (ciclo, bifurcación) se propagan al llamador.
    """

    def __init__(self, index: IGapIndex, batch_size: Optional[int] = None):
        self._index = index
        self._batch_size = batch_size if batch_size is not None else ConfigManager().batch_size
        if self._batch_size <= 0:
            raise ValueError(f"batch_size debe ser positivo, recibido: {self._batch_size}")

    @property
    def batch_size(self) -> int: return self._batch_size

    def run(self, source: IBlockSource) -> GapsResult:
        logger.info(f"🔎 Analizando {source.name} (lotes de {self._batch_size})...")

        batches = 0
        for batch in source.iter_batches(self._batch_size):
            self._index.append(batch)
            batches += 1

            # Log reducido para no saturar el archivo
            if batches % 100 == 0:
                logger.info(f"{source.name}: {batches} lotes, {self._index.total_blocks} bloques.")

        logger.info(f"✅ {source.name} analizado: {batches} lotes.")
        return GapsResult(self._index)

    def run_all(self, sources: Iterable[IBlockSource]) -> GapsResult:
        result = GapsResult(self._index)
        for source in sources:
            result = self.run(source)
        return result
