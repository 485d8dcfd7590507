"""BaseService — abstract foundation for all maytrix services.

Every service receives the frozen :class:`MaytrixSettings` at
construction time and reads its knobs (division scale, parallelism)
from there, so the core layers never consult ambient state.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from maytrix.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from maytrix.config.settings import MaytrixSettings
    from maytrix.value import Failure

logger = logging.getLogger(__name__)


class BaseService:
    """Abstract base for all service-layer classes.

    Usage::

        class ValueService(BaseService):
            def coerce(self, literal: str, target: str) -> ServiceResult:
                ...
    """

    def __init__(self, settings: MaytrixSettings) -> None:
        self._settings = settings

    @staticmethod
    def _fail(op: str, failure: Failure, **extra_detail: Any) -> ServiceResult:
        """Wrap a core failure in an error ServiceResult."""
        error = ServiceError.from_failure(failure)
        if extra_detail:
            error = error.model_copy(update={"detail": {**error.detail, **extra_detail}})
        logger.debug("%s failed: %s", op, failure)
        return ServiceResult(ok=False, op=op, error=error)
