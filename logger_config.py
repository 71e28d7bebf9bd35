# logger_config.py
import logging
import os
import glob
import sys
from typing import List, Optional

from gapfinder.core.config.paths import Paths

def setup_logging(log_dir: Optional[str] = None, level: int = logging.INFO) -> str:
    # 1. Ruta: por defecto data/logs (GAPS_DATA_DIR)
    if log_dir is None:
        log_dir = Paths.ensure_directories_exist()["logs"]
    else:
        os.makedirs(log_dir, exist_ok=True)

    # 2. Rotación de Archivos: siguiente número libre (gaps_0.log, gaps_1.log...)
    existentes: List[str] = glob.glob(os.path.join(log_dir, "gaps_*.log"))
    indices: List[int] = []
    for archivo in existentes:
        try:
            num = int(archivo.split('_')[-1].split('.')[0])
            indices.append(num)
        except (ValueError, IndexError): continue

    siguiente: int = max(indices) + 1 if indices else 0
    nombre_archivo: str = os.path.join(log_dir, f"gaps_{siguiente}.log")

    # 3. Configurar el Root Logger
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Limpiamos handlers anteriores para evitar duplicados si se llama dos veces
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    # --- CANAL 1: ARCHIVO (historial detallado) ---
    fh = logging.FileHandler(nombre_archivo, encoding='utf-8')
    fh.setLevel(level)
    fh.setFormatter(logging.Formatter('%(asctime)s [%(levelname)s] [%(name)s]: %(message)s'))

    # --- CANAL 2: TERMINAL (solo ERRORES o CRÍTICOS) ---
    # El reporte se imprime en stdout; la consola solo avisa si algo explota.
    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(logging.ERROR)
    ch.setFormatter(logging.Formatter('\n❌ ERROR EN: %(name)s | Línea: %(lineno)d\nDetalle: %(message)s\n'))

    root_logger.addHandler(fh)
    root_logger.addHandler(ch)

    return nombre_archivo
