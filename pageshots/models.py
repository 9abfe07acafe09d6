from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class ViewportSize(BaseModel):
    model_config = ConfigDict(frozen=True)

    width: int = Field(ge=0)
    height: int = Field(ge=0)

    @property
    def label(self) -> str:
        return f"{self.width}x{self.height}"


class CaptureTask(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str
    url_index: int = Field(ge=0)
    size: ViewportSize
    size_index: int = Field(ge=0)


class CaptureResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str
    success: bool
    file_path: Optional[str] = None
    error: Optional[str] = None

    @model_validator(mode="after")
    def check_outcome(self) -> "CaptureResult":
        """A success carries a file path and no error, a failure the reverse."""
        if self.success and (self.file_path is None or self.error is not None):
            raise ValueError("a successful result needs a file_path and no error")
        if not self.success and (self.error is None or self.file_path is not None):
            raise ValueError("a failed result needs an error and no file_path")
        return self

    @classmethod
    def succeeded(cls, url: str, file_path: str | Path) -> "CaptureResult":
        return cls(url=url, success=True, file_path=str(file_path))

    @classmethod
    def failed(cls, url: str, error: str) -> "CaptureResult":
        return cls(url=url, success=False, error=error)


class ReadinessTimings(BaseModel):
    model_config = ConfigDict(frozen=True)

    scroll_step: int = Field(100, gt=0)
    scroll_interval_millis: int = Field(100, ge=0)
    scroll_settle_millis: int = Field(500, ge=0)
    image_timeout_millis: int = Field(5000, ge=0)
    final_settle_millis: int = Field(1000, ge=0)


class BatchRunConfiguration(BaseModel):
    model_config = ConfigDict(frozen=True)

    output_dir: Path
    concurrency: int = Field(8, ge=1)
    timeout_millis: int = Field(30000, ge=1)
    stagger_millis: int = Field(1000, ge=0)
    readiness: ReadinessTimings = Field(default_factory=ReadinessTimings)
    headless: bool = True
    browser_args: tuple[str, ...] = ("--no-sandbox",)

    @field_validator("output_dir", mode="after")
    @classmethod
    def resolve_output_dir(cls, v: Path) -> Path:
        """Store the output directory as an absolute path."""
        return v.expanduser().resolve()
