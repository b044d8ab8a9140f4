"""Runtime settings, read from the environment (and a .env file if present)."""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from gedgraph.relationships import MAX_TRAVERSAL_DEPTH

PROJECT_ROOT = Path(__file__).parent.parent.parent


@dataclass
class Settings:
    gedcom_path: Path
    output_path: Path
    log_level: str = "INFO"
    max_depth: int = MAX_TRAVERSAL_DEPTH


def load_settings() -> Settings:
    """
    Build settings from GEDGRAPH_* environment variables.

    GEDGRAPH_GEDCOM_PATH  source .ged file (default: <project>/family.ged)
    GEDGRAPH_OUTPUT_PATH  JSON artifact (default: <project>/genealogy-data.json)
    GEDGRAPH_LOG_LEVEL    logging level name (default: INFO)
    GEDGRAPH_MAX_DEPTH    generation-distance search bound (default: 10)
    """
    load_dotenv()

    max_depth = os.getenv("GEDGRAPH_MAX_DEPTH", str(MAX_TRAVERSAL_DEPTH))
    try:
        depth = int(max_depth)
    except ValueError:
        raise ValueError(f"GEDGRAPH_MAX_DEPTH must be an integer, got {max_depth!r}") from None

    return Settings(
        gedcom_path=Path(os.getenv("GEDGRAPH_GEDCOM_PATH", PROJECT_ROOT / "family.ged")),
        output_path=Path(os.getenv("GEDGRAPH_OUTPUT_PATH", PROJECT_ROOT / "genealogy-data.json")),
        log_level=os.getenv("GEDGRAPH_LOG_LEVEL", "INFO").upper(),
        max_depth=depth,
    )
