import importlib
import sys
from pathlib import Path
from config.database import engine, SessionLocal, Base

# Dictionary of loaded models keyed by table name
models = {}

API_DIR = Path(__file__).parent.parent / "api"


# Import every `*_model.py` under `api` so Base.metadata sees all tables
def scan_models(directory: Path = API_DIR):
    project_root = directory.parent
    for item in sorted(directory.rglob("*_model.py")):
        module_name = ".".join(item.relative_to(project_root).with_suffix("").parts)
        module = sys.modules.get(module_name) or importlib.import_module(module_name)

        for attr_name in dir(module):
            attr = getattr(module, attr_name)
            if hasattr(attr, "__tablename__"):
                models[attr.__tablename__] = attr
    return models

scan_models()

# Exporting components
__all__ = ["engine", "SessionLocal", "Base", "models"]
