"""
ClinScore API Dependencies
==========================

FastAPI dependency injection for shared resources.

Provides a lazily initialized singleton holding:
    - ScoreLibrary loaded from the configured scores directory
    - ScoreCalculator bound to that library

The container starts in **degraded mode** when the scores directory is
missing, so health endpoints still answer while calculation endpoints
return 503.

Author: ClinScore Team
Version: 1.0.0
"""

import logging
from typing import Optional

from fastapi import HTTPException

from clinscore.config import settings
from clinscore.scoring.engine import ScoreCalculator
from clinscore.scoring.loader import ScoreLibrary, ScoreLoadError, load_all_scores


logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Singleton container for shared services.

    Definitions are immutable once loaded, so one library is shared by all
    requests without locking.
    """

    _instance: Optional["ServiceContainer"] = None

    def __init__(self):
        self._library: Optional[ScoreLibrary] = None
        self._calculator: Optional[ScoreCalculator] = None
        self._initialized = False

    @classmethod
    def get_instance(cls) -> "ServiceContainer":
        """Get or create the singleton instance."""
        if cls._instance is None:
            cls._instance = ServiceContainer()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Drop the singleton (used by tests)."""
        cls._instance = None

    def use_library(self, library: ScoreLibrary) -> None:
        """Install an already loaded library."""
        self._library = library
        self._calculator = ScoreCalculator(library)
        self._initialized = True

    async def initialize(self, scores_dir: Optional[str] = None) -> None:
        """Load the score library (graceful degradation on failure)."""
        if self._initialized:
            return

        scores_dir = scores_dir or settings.scores_dir
        logger.info(f"Loading score library from {scores_dir}...")

        try:
            self.use_library(load_all_scores(scores_dir))
            logger.info(f"Score library ready ({self._library.count()} scores)")
        except ScoreLoadError as e:
            logger.warning(f"Score library unavailable, running in DEGRADED mode: {e}")
            self._library = None
            self._calculator = None
            self._initialized = True

    async def shutdown(self) -> None:
        """Release loaded definitions."""
        logger.info("Shutting down service container...")
        self._library = None
        self._calculator = None
        self._initialized = False

    @property
    def library(self) -> Optional[ScoreLibrary]:
        return self._library

    @property
    def calculator(self) -> Optional[ScoreCalculator]:
        return self._calculator

    @property
    def available(self) -> bool:
        return self._library is not None


# Dependency functions for FastAPI
async def require_calculator() -> ScoreCalculator:
    """
    FastAPI dependency that **requires** a loaded score library.

    Raises HTTP 503 in degraded mode.
    """
    calculator = ServiceContainer.get_instance().calculator
    if calculator is None:
        raise HTTPException(
            status_code=503,
            detail=f"Score library unavailable (no definitions loaded from "
                   f"'{settings.scores_dir}')",
        )
    return calculator
