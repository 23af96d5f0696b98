# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""
Cost calibration against a wall-clock budget.

Example:

    calibrate(200)   # => 10 on typical hardware
    calibrate(1000)  # => 12

Assumptions:
- Cost is exponential, so probing upwards from 1 ends within a few iterations
- The ceiling is measured after each probe; a running probe is never cut short
- The returned cost is the last one whose full hash stayed within the ceiling
"""
import time
from typing import Callable, Optional

from bcryptkit.config import Settings
from bcryptkit.engine import Engine
from bcryptkit.logging_config import get_logger
from bcryptkit.password import PasswordHash

logger = get_logger(__name__)

MIN_CALIBRATION_COST = 1


class Calibrator:
    """Find the highest cost whose hash completes under a time ceiling.

    Args:
        engine: Engine used for probe hashes
        clock: Monotonic clock returning seconds (time.perf_counter by default)
        settings: Probe secret and upper cost bound; the engine's settings
            when omitted
    """

    def __init__(
        self,
        engine: Optional[Engine] = None,
        clock: Optional[Callable[[], float]] = None,
        settings: Optional[Settings] = None,
    ):
        self.engine = engine or Engine(settings=settings)
        self.settings = settings or self.engine.settings
        self._clock = clock or time.perf_counter

    def calibrate(self, ceiling_ms: float) -> int:
        """Return the cost factor whose hash time stays under ``ceiling_ms``.

        Args:
            ceiling_ms: Upper time limit in milliseconds

        Returns:
            int: Last probed cost within the ceiling. If even the first probe
            overshoots, the minimum cost (1); if no probe overshoots, the
            configured upper bound.

        Raises:
            ValueError: If ceiling_ms is not a positive number
        """
        if isinstance(ceiling_ms, bool) or not isinstance(ceiling_ms, (int, float)):
            raise ValueError("ceiling_ms must be a number")
        if ceiling_ms <= 0:
            raise ValueError("ceiling_ms must be > 0")

        upper = self.settings.calibration_max_cost
        for cost in range(MIN_CALIBRATION_COST, upper + 1):
            start = self._clock()
            PasswordHash.create(self.settings.calibration_probe, cost, engine=self.engine)
            elapsed_ms = (self._clock() - start) * 1000
            logger.debug("calibration_probe", cost=cost, elapsed_ms=round(elapsed_ms, 3))
            if elapsed_ms > ceiling_ms:
                chosen = max(cost - 1, MIN_CALIBRATION_COST)
                logger.info("calibration_finished", cost=chosen, ceiling_ms=ceiling_ms)
                return chosen

        logger.info("calibration_exhausted", cost=upper, ceiling_ms=ceiling_ms)
        return upper


def calibrate(ceiling_ms: float, engine: Optional[Engine] = None) -> int:
    """Shortcut for Calibrator(engine).calibrate(ceiling_ms)."""
    return Calibrator(engine=engine).calibrate(ceiling_ms)
