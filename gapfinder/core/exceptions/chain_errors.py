# gapfinder/core/exceptions/chain_errors.py
'''
Errores estructurales del flujo de bloques.
    Ambos indican que los datos de entrada no forman caminos simples disjuntos;
    no son fallos transitorios y nunca se reintentan.
'''

from gapfinder.core.models.block_link import BlockLink

class ChainStructureError(ValueError):
    pass

class CycleDetectedError(ChainStructureError):

    def __init__(self, head: BlockLink, tail: BlockLink):
        self.head = head
        self.tail = tail
        super().__init__(f"Cadena cíclica detectada: head {head}, tail {tail}")

class ForkDetectedError(ChainStructureError):

    def __init__(self, block_hash: str):
        self.block_hash = block_hash
        super().__init__(f"Bifurcación detectada en el bloque {block_hash}")
