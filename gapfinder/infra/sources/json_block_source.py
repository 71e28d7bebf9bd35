# gapfinder/infra/sources/json_block_source.py

import json
import logging
import os
from typing import Iterator, List, Dict, Any

from gapfinder.core.interfaces.i_block_source import IBlockSource
from gapfinder.core.models.block_link import BlockLink

logger = logging.getLogger(__name__)

class JsonBlockSource(IBlockSource):
    """
    Lee bloques desde un arreglo JSON o desde JSON Lines (un objeto por línea).
    JSON Lines se lee en streaming, línea a línea; un arreglo JSON se carga completo
    en memoria, así que para volcados grandes conviene JSON Lines.
    """

    def __init__(self, filepath: str):
        if not os.path.exists(filepath):
            raise FileNotFoundError(f"No existe el archivo de bloques: {filepath}")
        self.filepath = filepath

    @property
    def name(self) -> str:
        return os.path.basename(self.filepath)

    def iter_batches(self, batch_size: int) -> Iterator[List[BlockLink]]:
        if batch_size <= 0:
            raise ValueError(f"batch_size debe ser positivo, recibido: {batch_size}")

        batch: List[BlockLink] = []
        for data in self._iter_records():
            batch.append(BlockLink.from_dict(data))
            if len(batch) >= batch_size:
                yield batch
                batch = []

        if batch:
            yield batch

    def _iter_records(self) -> Iterator[Dict[str, Any]]:
        with open(self.filepath, 'r', encoding='utf-8') as f:
            first = self._first_char(f)
            f.seek(0)

            if first == "[":
                try:
                    records = json.load(f)
                except json.JSONDecodeError as e:
                    raise ValueError(f"JSON corrupto en {self.filepath}: {e}") from e
                logger.info(f"📄 {self.name}: arreglo JSON con {len(records)} bloques.")
                yield from records
                return

            # JSON Lines
            for line_no, line in enumerate(f, start=1):
                line = line.strip()
                if not line:
                    continue
                try:
                    yield json.loads(line)
                except json.JSONDecodeError as e:
                    raise ValueError(f"JSON corrupto en {self.filepath}, línea {line_no}: {e}") from e

    @staticmethod
    def _first_char(f: Any) -> str:
        while True:
            ch = f.read(1)
            if not ch or not ch.isspace():
                return ch
