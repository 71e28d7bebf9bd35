# gapfinder/infra/sources/source_factory.py

import logging
import os

from gapfinder.core.interfaces.i_block_source import IBlockSource
from gapfinder.infra.sources.json_block_source import JsonBlockSource
from gapfinder.infra.sources.sqlite_block_source import SqliteBlockSource

logger = logging.getLogger(__name__)

class SourceFactory:

    @staticmethod
    def from_path(path: str) -> IBlockSource:
        """Factory por extensión de archivo."""
        extension = os.path.splitext(path)[1].lower()

        if extension in (".db", ".sqlite", ".sqlite3"):
            logger.info(f"🏗️  Origen SQLITE: {path}")
            return SqliteBlockSource(path)
        elif extension in (".json", ".jsonl"):
            logger.info(f"🏗️  Origen JSON: {path}")
            return JsonBlockSource(path)
        else:
            error_msg = f"Formato '{extension or path}' no soportado como origen de bloques."
            logger.error(f"❌ {error_msg}")
            raise ValueError(error_msg)
