"""taskboard models."""

import pkgutil
from pathlib import Path


def load_all_models() -> None:
    """Load all models from this folder."""
    db_models_dir = Path(__file__).resolve().parent
    for module_info in pkgutil.walk_packages(
        path=[str(db_models_dir)],
        prefix="taskboard.db.models.",
    ):
        if not module_info.name.endswith("__init__"):
            __import__(module_info.name)
