from __future__ import annotations

"""Analytics configuration (hyperparameters) using Pydantic."""

from pydantic import BaseModel, Field


class AnalyticsConfig(BaseModel):
    """Hyperparameters for report rollups and smoothing.

    - trend_window: sessions per comparison window (recent vs. the next older)
    - trend_threshold: accuracy points a window must move to leave "stable"
    - smoothing_span: EWMA span in sessions (>1)
    """

    trend_window: int = Field(5, ge=1)
    trend_threshold: float = Field(5.0, ge=0)
    smoothing_span: int = Field(5, gt=1)
