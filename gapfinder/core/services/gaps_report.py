# gapfinder/core/services/gaps_report.py

import sys
from datetime import datetime, timezone
from typing import Dict, List, Optional, Any, TextIO

from gapfinder.core.models.chain_segment import ChainSegment
from gapfinder.core.interfaces.i_gap_index import IGapIndex
from gapfinder.core.config.config_manager import ConfigManager

class GapsResult:
    """
    Vista de solo lectura sobre un índice de tramos.
    Nunca modifica el índice: todas las consultas trabajan sobre copias.
    """

    def __init__(self, index: IGapIndex, time_format: Optional[str] = None):
        self._index = index
        self._time_format = time_format or ConfigManager().time_format

    # --- Consultas ---

    @property
    def total_blocks(self) -> int: return self._index.total_blocks
    @property
    def took(self) -> float: return self._index.took
    @property
    def chain_count(self) -> int: return len(self._index.chains())

    def chains(self) -> Dict[str, ChainSegment]:
        return self._index.chains()

    def chains_as_list(self) -> List[ChainSegment]:
        return self._index.chains_as_list()

    def sorted_chains(self) -> List[ChainSegment]:
        # Orden por fecha del head; sin fecha van primero. sort() es estable.
        chains = self._index.chains_as_list()
        chains.sort(key=lambda c: c.head.timestamp if c.head.timestamp is not None else float("-inf"))
        return chains

    def longest(self) -> Optional[ChainSegment]:
        longest: Optional[ChainSegment] = None
        for chain in self.sorted_chains():
            if longest is None or longest.length < chain.length:
                longest = chain
        return longest

    def summary(self) -> Dict[str, Any]:
        longest = self.longest()
        return {
            "total_blocks": self.total_blocks,
            "chain_count": self.chain_count,
            "took_seconds": round(self.took, 6),
            "longest": longest.to_dict() if longest else None
        }

    # --- Presentación ---

    def format_time(self, timestamp: Optional[int]) -> str:
        if timestamp is None:
            return "-"
        try:
            return datetime.fromtimestamp(timestamp, tz=timezone.utc).strftime(self._time_format)
        except (OverflowError, OSError, ValueError):
            # Fuera del rango de la plataforma: se muestra el valor crudo
            return str(timestamp)

    def render(self) -> str:
        header = ["chain", "blocks", "head", "head time", "tail", "tail time"]
        rows: List[List[str]] = []

        for i, c in enumerate(self.sorted_chains()):
            rows.append([
                str(i), str(c.length),
                c.head.block_hash, self.format_time(c.head.timestamp),
                c.tail.block_hash, self.format_time(c.tail.timestamp)
            ])

        lines = self._align([header] + rows)

        longest = self.longest()
        if longest is not None:
            longest_line = (
                f"Longest: {longest.length} blocks  "
                f"head {longest.head.block_hash}  tail {longest.tail.block_hash}"
            )
            lines.append("-" * len(longest_line))
            lines.append(longest_line)
            lines.append(
                f"         head time {self.format_time(longest.head.timestamp)}  "
                f"tail time {self.format_time(longest.tail.timestamp)}"
            )

        lines.append(f"Total:   {self.total_blocks} blocks")
        lines.append(f"Found:   {self.chain_count} chains")
        lines.append(f"Took:    {self.took:.6f}s")
        return "\n".join(lines) + "\n"

    def print(self, stream: Optional[TextIO] = None) -> None:
        out = stream if stream is not None else sys.stdout
        out.write(self.render())
        out.flush()

    @staticmethod
    def _align(table: List[List[str]]) -> List[str]:
        widths = [max(len(row[col]) for row in table) for col in range(len(table[0]))]
        return [
            " ".join(cell.ljust(widths[col]) for col, cell in enumerate(row)).rstrip()
            for row in table
        ]
