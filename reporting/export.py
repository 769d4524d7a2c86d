"""Write market table exports to disk."""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from ingestion.table import MarketTable


logger = logging.getLogger(__name__)


class JsonExporter:
    """JSON file writer for market table exports."""

    def __init__(self, base_dir: Path):
        self.base_dir = Path(base_dir)
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def write(self, table: MarketTable, filename: Optional[str] = None) -> Path:
        """Write the table export and return the file path."""
        if filename is None:
            timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
            filename = f"markets_{timestamp}.json"

        full_path = self.base_dir / filename
        full_path.parent.mkdir(parents=True, exist_ok=True)

        with open(full_path, "w") as f:
            json.dump(table.export(), f, indent=2, default=str)

        logger.info(f"Wrote {len(table)} markets to {full_path}")
        return full_path
