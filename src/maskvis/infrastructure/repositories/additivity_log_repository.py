# src/maskvis/infrastructure/repositories/additivity_log_repository.py
"""Append-only store for additivity records."""

import logging
import os
from typing import List, Optional

from ...core.domain.models.attribution import AdditivityRecord
from ...core.interfaces.repository import Repository


class AdditivityLogRepository(Repository[AdditivityRecord]):
    """Whitespace-separated additivity log, one record per line.

    Records are only ever appended; existing lines are never rewritten.
    """

    def __init__(self, log_path: str):
        """
        Initialize repository with the log file path.

        Args:
            log_path: Log file, created on first append
        """
        self._log_path = log_path
        self.logger = logging.getLogger(__name__)

    @property
    def log_path(self) -> str:
        return self._log_path

    def get(self, id: str) -> Optional[AdditivityRecord]:
        """
        Retrieve the latest record for a ligand path.

        Args:
            id: Ligand path, canonicalized before comparison

        Returns:
            Most recent matching record, or None
        """
        canonical = os.path.realpath(id)
        matches = [r for r in self.list() if r.source_path == canonical]
        return matches[-1] if matches else None

    def list(self) -> List[AdditivityRecord]:
        """List all parseable records in the order they were appended."""
        if not os.path.exists(self._log_path):
            return []

        records = []
        with open(self._log_path, "r") as f:
            for line_num, line in enumerate(f, start=1):
                if not line.strip():
                    continue
                try:
                    records.append(AdditivityRecord.from_line(line))
                except ValueError:
                    self.logger.warning(
                        f"Skipping malformed line {line_num} in {self._log_path}"
                    )
        return records

    def create(self, entity: AdditivityRecord) -> AdditivityRecord:
        """Append a record to the log."""
        directory = os.path.dirname(os.path.abspath(self._log_path))
        os.makedirs(directory, exist_ok=True)

        with open(self._log_path, "a") as f:
            f.write(entity.to_line())

        self.logger.info(f"Appended additivity record to {self._log_path}")
        return entity
