# gapfinder/core/config/finder_config.py
import os
from typing import Dict, Any

class FinderConfig:
    """
    Configuración del índice de tramos.
    Define el tamaño de lote de lectura, el índice secundario de tails y el formato de fechas del reporte.
    """
    def __init__(self):
        self._batch_size = int(os.getenv("GAPS_BATCH_SIZE", 1000))
        self._tail_index = os.getenv("GAPS_TAIL_INDEX", "False").lower() == "true"
        self._time_format = os.getenv("GAPS_TIME_FORMAT", "%Y-%m-%d %H:%M:%S")

    # --- Propiedades ---
    @property
    def batch_size(self) -> int: return self._batch_size
    @property
    def tail_index(self) -> bool: return self._tail_index
    @property
    def time_format(self) -> str: return self._time_format

    def update_from_dict(self, data: Dict[str, Any]) -> None:
        """Actualiza la configuración desde un diccionario externo (JSON)."""
        if not data: return

        if "batch_size" in data:
            batch_size = int(data["batch_size"])
            if batch_size <= 0:
                raise ValueError(f"batch_size debe ser positivo, recibido: {batch_size}")
            self._batch_size = batch_size

        if "tail_index" in data:
            self._tail_index = bool(data["tail_index"])

        if "time_format" in data:
            self._time_format = str(data["time_format"])
