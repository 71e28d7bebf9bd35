import os
import sys
import json
import argparse
import logging

from typing import Any, List, Optional

import uvicorn

import logger_config

from gapfinder.core.config.config_manager import ConfigManager
from gapfinder.core.managers.block_gaps_finder import BlockGapsFinder
from gapfinder.core.services.gaps_analyzer import GapsAnalyzer
from gapfinder.core.exceptions.chain_errors import ChainStructureError
from gapfinder.infra.sources.source_factory import SourceFactory

logger = logging.getLogger()

# =========================================================
# 🛠️ FUNCIONES DE UTILIDAD
# =========================================================

def load_config(config_path: str) -> dict[str, Any]:
    """Carga el archivo JSON de configuración."""
    if not os.path.exists(config_path):
        raise FileNotFoundError(f"No existe el archivo de configuración: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"JSON Corrupto en {config_path}: {e}") from e

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Buscador de huecos en cadenas de bloques")

    parser.add_argument("sources", nargs="*", help="Archivos .json/.jsonl o bases .db a analizar, en orden")
    parser.add_argument("--config", type=str, help="Archivo JSON de configuración")
    parser.add_argument("--batch-size", type=int, help="Bloques por lote")
    parser.add_argument("--tail-index", action="store_true", help="Usar índice secundario de tails")
    parser.add_argument("--serve", action="store_true", help="Levantar la API HTTP en lugar de analizar archivos")
    parser.add_argument("--log-dir", type=str, help="Carpeta de logs")

    return parser

def analyze(sources: List[str], batch_size: Optional[int], tail_index: bool) -> int:
    finder = BlockGapsFinder(tail_index=True if tail_index else None)
    try:
        analyzer = GapsAnalyzer(finder, batch_size=batch_size)
        result = analyzer.run_all(SourceFactory.from_path(path) for path in sources)
    except ChainStructureError as e:
        logger.critical(f"❌ Estructura de bloques inválida: {e}")
        return 1
    except (ValueError, OSError) as e:
        logger.critical(f"❌ No se pudo leer el origen: {e}")
        return 1

    result.print(sys.stdout)
    return 0

# =========================================================
# 🚀 ENTRY POINT PRINCIPAL
# =========================================================

def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    log_file = logger_config.setup_logging(args.log_dir)
    logger.info(f"📝 Log de sesión: {log_file}")

    if args.config:
        try:
            ConfigManager().load_from_json_dict(load_config(args.config))
        except (ValueError, OSError) as e:
            logger.critical(f"❌ Configuración inválida: {e}")
            return 1

    if args.serve:
        from gapfinder.interface.api.config import settings
        uvicorn.run("gapfinder.interface.api.server:app", host=settings.host, port=settings.port, log_level="info")
        return 0

    if not args.sources:
        logger.critical("❌ No se indicó ningún origen de bloques.")
        return 1

    return analyze(args.sources, args.batch_size, args.tail_index)

if __name__ == "__main__":
    sys.exit(main())
