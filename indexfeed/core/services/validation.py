"""Eligibility checks for index history requests."""

from __future__ import annotations

from enum import Enum

from loguru import logger

from indexfeed.core.exceptions import ErrorCode, IneligibleRequestError
from indexfeed.core.models import HistoryRequest, Resolution, SecurityType, TickType


class IneligibilityReason(str, Enum):
    """Why a request cannot be served, in the order the checks run."""

    SECURITY_TYPE = "security_type"
    RESOLUTION = "resolution"
    TICK_TYPE = "tick_type"


class RequestValidator:
    """Rejects requests this provider cannot serve.

    Each rejection reason is reported once per validator; repeated rejections
    for the same reason are silent.
    """

    def __init__(self, provider_label: str = "IndexHistoryProvider") -> None:
        self.provider_label = provider_label
        self._reported: dict[IneligibilityReason, bool] = {reason: False for reason in IneligibilityReason}

    @property
    def reported(self) -> dict[IneligibilityReason, bool]:
        return dict(self._reported)

    def check(self, request: HistoryRequest) -> IneligibilityReason | None:
        """Return the first failed predicate, or ``None`` when eligible."""

        if request.security_type != SecurityType.INDEX:
            self._report(
                IneligibilityReason.SECURITY_TYPE,
                f"Invalid security type {request.security_type.value}. "
                f"The {self.provider_label} can only provide history for {SecurityType.INDEX.value} securities.",
            )
            return IneligibilityReason.SECURITY_TYPE

        if request.resolution != Resolution.DAILY:
            self._report(
                IneligibilityReason.RESOLUTION,
                f"Invalid resolution {request.resolution.value}. "
                f"The {self.provider_label} can only provide history for {Resolution.DAILY.value} resolution.",
            )
            return IneligibilityReason.RESOLUTION

        if request.tick_type != TickType.TRADE:
            self._report(
                IneligibilityReason.TICK_TYPE,
                f"Invalid tick type {request.tick_type.value}. "
                f"The {self.provider_label} can only provide history for {TickType.TRADE.value} tick type.",
            )
            return IneligibilityReason.TICK_TYPE

        return None

    def is_eligible(self, request: HistoryRequest) -> bool:
        return self.check(request) is None

    def ensure_eligible(self, request: HistoryRequest) -> None:
        """Raise :class:`IneligibleRequestError` instead of returning a reason."""

        reason = self.check(request)
        if reason is not None:
            raise IneligibleRequestError(
                f"{request.description} cannot be served by {self.provider_label}",
                reason.value,
            )

    def _report(self, reason: IneligibilityReason, message: str) -> None:
        if self._reported[reason]:
            return
        self._reported[reason] = True
        logger.bind(error_code=ErrorCode.INELIGIBLE_REQUEST.value, reason=reason.value).error(message)


__all__ = ["IneligibilityReason", "RequestValidator"]
