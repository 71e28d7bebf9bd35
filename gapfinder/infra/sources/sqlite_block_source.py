# gapfinder/infra/sources/sqlite_block_source.py

import sqlite3
import logging
import os
from typing import Iterator, List

from gapfinder.core.interfaces.i_block_source import IBlockSource
from gapfinder.core.models.block_link import BlockLink

logger = logging.getLogger(__name__)

class SqliteBlockSource(IBlockSource):
    """
    Lee (hash, prev_hash, timestamp) desde la tabla de bloques de una base SQLite de nodo.
    La conexión se abre en modo solo lectura: el análisis nunca toca la base.
    """

    def __init__(self, db_path: str, table: str = "blocks"):
        if not os.path.exists(db_path):
            raise FileNotFoundError(f"No existe la base de datos: {db_path}")
        if not table.isidentifier():
            raise ValueError(f"Nombre de tabla inválido: {table}")
        self.db_path = db_path
        self.table = table

    @property
    def name(self) -> str:
        return f"{os.path.basename(self.db_path)}:{self.table}"

    def iter_batches(self, batch_size: int) -> Iterator[List[BlockLink]]:
        if batch_size <= 0:
            raise ValueError(f"batch_size debe ser positivo, recibido: {batch_size}")

        conn = sqlite3.connect(f"file:{self.db_path}?mode=ro", uri=True)
        try:
            cursor = conn.cursor()
            try:
                cursor.execute(f"SELECT hash, prev_hash, timestamp FROM {self.table} ORDER BY rowid")
            except sqlite3.OperationalError as e:
                raise ValueError(f"Tabla '{self.table}' ilegible en {self.db_path}: {e}") from e

            logger.info(f"🔌 Leyendo bloques desde {self.name}")
            while True:
                rows = cursor.fetchmany(batch_size)
                if not rows:
                    break
                yield [
                    BlockLink(
                        block_hash=str(row[0]),
                        prev_hash=str(row[1]),
                        timestamp=int(row[2]) if row[2] is not None else None
                    )
                    for row in rows
                ]
        finally:
            conn.close()
