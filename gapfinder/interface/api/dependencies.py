# gapfinder/interface/api/dependencies.py
import logging
import threading
from typing import Optional

from gapfinder.core.managers.block_gaps_finder import BlockGapsFinder

logger = logging.getLogger(__name__)

class FinderContainer:
    """
    Guarda la única instancia del índice que comparte la API.
    El índice no es seguro para mutación concurrente: todo acceso pasa por _lock.
    """
    _instance: Optional[BlockGapsFinder] = None
    _lock = threading.RLock()

    @classmethod
    def get_instance(cls) -> BlockGapsFinder:
        with cls._lock:
            if cls._instance is None:
                cls._instance = BlockGapsFinder()
                logger.info("✅ [API-DI] Índice de tramos creado.")
            return cls._instance

    @classmethod
    def set_instance(cls, finder: BlockGapsFinder):
        with cls._lock:
            cls._instance = finder
            logger.info(f"✅ [API-DI] Instancia '{type(finder).__name__}' inyectada correctamente.")

    @classmethod
    def get_lock(cls) -> threading.RLock:
        return cls._lock

    @classmethod
    def reset(cls):
        with cls._lock:
            if cls._instance is not None:
                logger.info(f"🛑 [API] Descartando índice ({cls._instance.total_blocks} bloques).")
            cls._instance = None

def get_finder_dependency() -> BlockGapsFinder:
    return FinderContainer.get_instance()
