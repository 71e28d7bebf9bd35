# gapfinder/core/config/config_manager.py
'''
class ConfigManager:
    Centraliza el acceso a la configuración del analizador, cargando valores desde el entorno (.env) o JSON.

    Methods:
        __new__(cls): Implementa el patrón Singleton para asegurar una única instancia.
        _initialize(self): Carga las configuraciones especializadas con valores por defecto/entorno.
        load_from_json_dict(self, json_data: Dict[str, Any]) -> None: Actualiza las sub-configuraciones desde un diccionario JSON.
'''

from dotenv import load_dotenv
from typing import Dict, Any

# Cargar variables de entorno si existen
load_dotenv()

from gapfinder.core.config.finder_config import FinderConfig

class ConfigManager:

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(ConfigManager, cls).__new__(cls)
            cls._instance._initialize()
        return cls._instance

    def _initialize(self):
        self._finder = FinderConfig()

    def load_from_json_dict(self, json_data: Dict[str, Any]) -> None:
        if "finder" in json_data:
            self._finder.update_from_dict(json_data["finder"])

    @property
    def finder(self) -> FinderConfig:
        return self._finder

    # --- Atajos ---
    @property
    def batch_size(self) -> int: return self._finder.batch_size
    @property
    def tail_index(self) -> bool: return self._finder.tail_index
    @property
    def time_format(self) -> str: return self._finder.time_format
