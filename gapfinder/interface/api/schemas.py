# gapfinder/interface/api/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from typing import List, Optional

class ImmutableModel(BaseModel):
    """
    Clase base que fuerza la inmutabilidad (frozen=True).
    Garantiza que el estado del objeto no sea modificado después de crearse.
    """
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra='ignore'
    )

# --- ENTRADA DE BLOQUES ---

class BlockLinkRequest(ImmutableModel):
    hash: str = Field(..., min_length=1, description="Hash del bloque")
    prev_hash: str = Field(..., min_length=1, alias="previous_hash", description="Hash del bloque previo")
    timestamp: Optional[int] = Field(None, ge=0, description="Fecha Unix (solo para reportes)")

class AppendBlocksRequest(ImmutableModel):
    blocks: List[BlockLinkRequest] = Field(default_factory=list)

class AppendBlocksResponse(ImmutableModel):
    accepted: int
    total_blocks: int
    chain_count: int

# --- CONSULTAS ---

class ChainSegmentResponse(ImmutableModel):
    gap_hash: str
    length: int
    head_hash: str
    head_timestamp: Optional[int]
    tail_hash: str
    tail_timestamp: Optional[int]

class SummaryResponse(ImmutableModel):
    total_blocks: int
    chain_count: int
    took_seconds: float
    longest: Optional[ChainSegmentResponse]

class StatusResponse(ImmutableModel):
    total_blocks: int
    chain_count: int
    took_seconds: float
    tail_index: bool
