"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator, model_validator

from hilbertplot.config import settings
from hilbertplot.engine.grammar import parse_family
from hilbertplot.engine.region import Orientation


class CurveRequest(BaseModel):
    width: int = Field(..., ge=0, description="Grid width in cells")
    height: int = Field(..., ge=0, description="Grid height in cells")
    family: str = Field(
        default_factory=lambda: settings.default_family,
        validate_default=True,
        description="Curve family, H0..H39; defaults to the configured family",
    )
    orientation: str = Field(default="A", description="Orientation A, B, C or D")
    origin: tuple[int, int] = Field(default=(0, 0), description="Coordinates of the lower-left cell")
    discontinuity: bool = Field(default=False, description="Also compute the discontinuity map")

    @field_validator("family")
    @classmethod
    def _family(cls, value: str) -> str:
        return parse_family(value).name

    @field_validator("orientation")
    @classmethod
    def _orientation(cls, value: str) -> str:
        return Orientation.parse(value).name


class PlotRequest(BaseModel):
    data: list[float] | None = Field(default=None, description="Values to plot")
    text: str | None = Field(
        default=None,
        description="Values as plain text (whitespace, comma or semicolon separated)",
    )
    width: int = Field(default=0, ge=0, description="Plot width; 0 with height 0 picks best-fit")
    height: int = Field(default=0, ge=0, description="Plot height")
    family: str = Field(
        default_factory=lambda: settings.default_family,
        validate_default=True,
        description="Curve family, H0..H39; defaults to the configured family",
    )
    threshold: float | None = Field(
        default=None, ge=0.0, description="Discontinuity sentinel threshold; unset uses the engine default"
    )
    log_scale: bool | None = Field(
        default=None, description="Log-compress the spectrum; unset uses the engine default"
    )
    include_image: bool = Field(default=True, description="Return the image matrix")
    include_spectrum: bool = Field(default=True, description="Return the spectrum")

    @field_validator("family")
    @classmethod
    def _family(cls, value: str) -> str:
        return parse_family(value).name

    @model_validator(mode="after")
    def _one_source(self) -> PlotRequest:
        if (self.data is None) == (self.text is None):
            raise ValueError("Provide exactly one of 'data' or 'text'")
        return self
