"""API response models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    families: int = 0
    analyses_registered: int = 0


class FamilyInfo(BaseModel):
    name: str
    children: list[str] = Field(default_factory=list)


class CurveResponse(BaseModel):
    family: str
    orientation: str
    width: int
    height: int
    origin: tuple[int, int]
    points: list[tuple[int, int]]
    discontinuity: list[float] | None = None
    mean_discontinuity: float | None = None


class DimensionsResponse(BaseModel):
    length: int
    width: int
    height: int


class PlotAnalysisResponse(BaseModel):
    width: int
    height: int
    family: str
    summary: dict[str, float] = Field(default_factory=dict)
    metrics: dict[str, Any] = Field(default_factory=dict)
    image: list[list[float]] | None = None
    spectrum: list[float] | None = None
    completed: list[str] = Field(default_factory=list)
    errors: dict[str, str] = Field(default_factory=dict)
    processing_time_ms: float = 0.0
