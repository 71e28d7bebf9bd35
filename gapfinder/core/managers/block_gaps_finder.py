# gapfinder/core/managers/block_gaps_finder.py
'''
class BlockGapsFinder:
    Busca todas las cadenas posibles que forman los bloques recibidos, lote a lote.
    De cada cadena solo conserva head, tail y longitud, por eso no detecta todas
    las bifurcaciones ni todos los ciclos, y tampoco detecta duplicados.

    Methods:
        append(self, blocks): Enlaza un lote de bloques y fusiona los tramos adyacentes.
        chains(self) -> Dict[str, ChainSegment]: Copia del mapa gap_hash -> tramo.
        chains_as_list(self) -> List[ChainSegment]: Copia de los tramos como lista.
        result(self) -> GapsResult: Proyección de solo lectura para reportes.
'''

import time
import logging
from typing import Dict, Iterable, List, Optional

from gapfinder.core.models.block_link import BlockLink
from gapfinder.core.models.chain_segment import ChainSegment
from gapfinder.core.interfaces.i_gap_index import IGapIndex
from gapfinder.core.exceptions.chain_errors import CycleDetectedError, ForkDetectedError
from gapfinder.core.config.config_manager import ConfigManager
from gapfinder.core.services.gaps_report import GapsResult

logger = logging.getLogger(__name__)

class BlockGapsFinder(IGapIndex):

    def __init__(self, tail_index: Optional[bool] = None):
        # hash previo al que apunta el head de cada tramo -> tramo
        self._chains: Dict[str, ChainSegment] = {}

        if tail_index is None:
            tail_index = ConfigManager().tail_index

        # Índice secundario opcional tail.hash -> tramo (evita el escaneo lineal)
        self._tails: Optional[Dict[str, ChainSegment]] = {} if tail_index else None

        self._total_blocks = 0
        self._took = 0.0

    # --- Propiedades ---
    @property
    def total_blocks(self) -> int: return self._total_blocks
    @property
    def took(self) -> float: return self._took
    @property
    def uses_tail_index(self) -> bool: return self._tails is not None

    def __len__(self) -> int:
        return len(self._chains)

    # --- Métodos Públicos ---

    def append(self, blocks: Iterable[BlockLink]) -> None:
        batch = list(blocks)
        if not batch:
            return

        self._total_blocks += len(batch)
        start = time.perf_counter()

        try:
            for block in batch:
                self._link_block(block)

            self._merge_adjacent()
        except (CycleDetectedError, ForkDetectedError) as e:
            logger.warning(f"⛔ Lote de {len(batch)} bloques abortado: {e}")
            raise
        finally:
            self._took += time.perf_counter() - start

        logger.info(f"🔗 Lote de {len(batch)} bloques procesado. Tramos abiertos: {len(self._chains)}")

    def chains(self) -> Dict[str, ChainSegment]:
        return dict(self._chains)

    def chains_as_list(self) -> List[ChainSegment]:
        return list(self._chains.values())

    def result(self) -> GapsResult:
        return GapsResult(self)

    # --- Enlace por bloque ---

    def _link_block(self, block: BlockLink) -> None:
        if block.block_hash == block.prev_hash:
            raise CycleDetectedError(block, block)

        if self._extend_head(block):
            return

        if self._extend_tail(block):
            return

        self._open_segment(block)

    def _extend_head(self, block: BlockLink) -> bool:
        """El bloque es el previo que le falta a un tramo: pasa a ser su nuevo head."""
        segment = self._chains.get(block.block_hash)
        if segment is None:
            return False

        if block.block_hash == segment.tail.block_hash:
            raise CycleDetectedError(block, segment.tail)

        owner = self._chains.get(block.prev_hash)
        if owner is not None:
            if owner.head.block_hash != block.block_hash:
                raise ForkDetectedError(block.block_hash)
            # Duplicado del head de otro tramo: ya es conocido
            logger.debug(f"Bloque duplicado ignorado: {block.block_hash}")
            return True

        # Re-key atómico: nunca dos claves para el mismo tramo
        del self._chains[block.block_hash]
        segment.head = block
        segment.length += 1
        self._chains[block.prev_hash] = segment
        return True

    def _extend_tail(self, block: BlockLink) -> bool:
        """El bloque continúa un tramo por su extremo más reciente."""
        segment = self._find_by_tail(block.prev_hash)
        if segment is None:
            return False

        if block.block_hash == segment.head.prev_hash:
            raise CycleDetectedError(segment.head, block)

        self._move_tail(segment, block)
        segment.length += 1
        return True

    def _open_segment(self, block: BlockLink) -> None:
        owner = self._chains.get(block.prev_hash)
        if owner is not None:
            if owner.head.block_hash != block.block_hash:
                raise ForkDetectedError(block.block_hash)
            logger.debug(f"Bloque duplicado ignorado: {block.block_hash}")
            return

        segment = ChainSegment(head=block, tail=block, length=1)
        self._chains[block.prev_hash] = segment
        if self._tails is not None:
            self._register_tail(block.block_hash, segment)

    # --- Fusión de tramos adyacentes ---

    def _merge_adjacent(self) -> None:
        merged = 0

        for gap_hash in list(self._chains.keys()):
            segment = self._chains.get(gap_hash)
            if segment is None:
                # Absorbido por otro tramo en esta misma pasada
                continue

            while True:
                if gap_hash == segment.tail.block_hash:
                    raise CycleDetectedError(segment.head, segment.tail)

                following = self._chains.get(segment.tail.block_hash)
                if following is None:
                    break

                del self._chains[segment.tail.block_hash]
                self._move_tail(segment, following.tail)
                segment.length += following.length
                merged += 1

        if merged:
            logger.debug(f"Fusión completada: {merged} tramos absorbidos.")

    # --- Métodos Privados de Ayuda ---

    def _find_by_tail(self, tail_hash: str) -> Optional[ChainSegment]:
        if self._tails is not None:
            return self._tails.get(tail_hash)

        for segment in self._chains.values():
            if segment.tail.block_hash == tail_hash:
                return segment
        return None

    def _move_tail(self, segment: ChainSegment, new_tail: BlockLink) -> None:
        if self._tails is not None:
            if self._tails.get(segment.tail.block_hash) is segment:
                del self._tails[segment.tail.block_hash]
            self._register_tail(new_tail.block_hash, segment)
        segment.tail = new_tail

    def _register_tail(self, tail_hash: str, segment: ChainSegment) -> None:
        # Con tails repetidos gana el primer tramo vivo, igual que el escaneo
        if self._tails is None:
            return
        current = self._tails.get(tail_hash)
        if current is None or current is segment or self._chains.get(current.gap_hash) is not current:
            self._tails[tail_hash] = segment
