# gapfinder/interface/api/server.py

import logging
from typing import List

from fastapi import FastAPI, Depends, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from gapfinder.interface.api import schemas
from gapfinder.interface.api.dependencies import FinderContainer, get_finder_dependency
from gapfinder.interface.api.config import settings
from gapfinder.core.managers.block_gaps_finder import BlockGapsFinder
from gapfinder.core.models.block_link import BlockLink
from gapfinder.core.exceptions.chain_errors import ChainStructureError

logger = logging.getLogger(__name__)

# ==============================================================================
# 🏗️ SERVICE LAYER
# ==============================================================================

class GapsService:
    def __init__(self, finder: BlockGapsFinder):
        self.finder = finder
        self._lock = FinderContainer.get_lock()

    def get_status(self) -> schemas.StatusResponse:
        with self._lock:
            return schemas.StatusResponse(
                total_blocks=self.finder.total_blocks,
                chain_count=len(self.finder),
                took_seconds=round(self.finder.took, 6),
                tail_index=self.finder.uses_tail_index
            )

    def append_blocks(self, req: schemas.AppendBlocksRequest) -> schemas.AppendBlocksResponse:
        blocks = [BlockLink(b.hash, b.prev_hash, b.timestamp) for b in req.blocks]

        with self._lock:
            try:
                self.finder.append(blocks)
            except ChainStructureError as e:
                raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

            return schemas.AppendBlocksResponse(
                accepted=len(blocks),
                total_blocks=self.finder.total_blocks,
                chain_count=len(self.finder)
            )

    def list_chains(self) -> List[schemas.ChainSegmentResponse]:
        with self._lock:
            chains = self.finder.result().sorted_chains()
            return [schemas.ChainSegmentResponse(**c.to_dict()) for c in chains]

    def get_longest(self) -> schemas.ChainSegmentResponse:
        with self._lock:
            longest = self.finder.result().longest()
            if longest is None:
                raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No hay tramos todavía.")
            return schemas.ChainSegmentResponse(**longest.to_dict())

    def get_summary(self) -> schemas.SummaryResponse:
        with self._lock:
            return schemas.SummaryResponse(**self.finder.result().summary())

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("🚀 [BOOT] Iniciando API de análisis de tramos...")
    FinderContainer.get_instance()
    yield
    logger.info("🛑 Apagando API de análisis de tramos...")
    FinderContainer.reset()

app = FastAPI(title=settings.title, version=settings.version, lifespan=lifespan)
app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_credentials=True, allow_methods=["*"], allow_headers=["*"])

def get_gaps_service(finder: BlockGapsFinder = Depends(get_finder_dependency)) -> GapsService:
    return GapsService(finder)

@app.get("/status", response_model=schemas.StatusResponse, tags=["Sistema"])
def get_status(service: GapsService = Depends(get_gaps_service)):
    return service.get_status()

@app.post("/blocks", response_model=schemas.AppendBlocksResponse, tags=["Bloques"])
def append_blocks(req: schemas.AppendBlocksRequest, service: GapsService = Depends(get_gaps_service)):
    return service.append_blocks(req)

@app.get("/chains", response_model=List[schemas.ChainSegmentResponse], tags=["Tramos"])
def list_chains(service: GapsService = Depends(get_gaps_service)):
    return service.list_chains()

@app.get("/chains/longest", response_model=schemas.ChainSegmentResponse, tags=["Tramos"])
def get_longest(service: GapsService = Depends(get_gaps_service)):
    return service.get_longest()

@app.get("/summary", response_model=schemas.SummaryResponse, tags=["Tramos"])
def get_summary(service: GapsService = Depends(get_gaps_service)):
    return service.get_summary()

@app.post("/reset", response_model=schemas.StatusResponse, tags=["Sistema"])
def reset_index():
    FinderContainer.reset()
    return GapsService(FinderContainer.get_instance()).get_status()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.host, port=settings.port)
