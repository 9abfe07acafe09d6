from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from pageshots.models import BatchRunConfiguration, ReadinessTimings


class Config(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="PAGESHOTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    output_dir: Path = Path("./screenshots")
    sizes: list[str] = Field(default_factory=lambda: ["1440x1080"])
    concurrency: int = 8
    timeout: int = 30
    stagger_millis: int = 1000
    headless: bool = True
    browser_args: list[str] = Field(default_factory=lambda: ["--no-sandbox"])
    readiness: ReadinessTimings = Field(default_factory=ReadinessTimings)

    def run_configuration(
        self,
        output: Path | None = None,
        concurrency: int | None = None,
        timeout: int | None = None,
    ) -> BatchRunConfiguration:
        """Build the immutable configuration for a single run.

        Args:
            output: Output directory, defaults to ``output_dir``.
            concurrency: Batch size, defaults to ``concurrency``.
            timeout: Navigation timeout in seconds, defaults to ``timeout``.

        Raises:
            pydantic.ValidationError: If a value is out of range.
        """
        return BatchRunConfiguration(
            output_dir=output if output is not None else self.output_dir,
            concurrency=concurrency if concurrency is not None else self.concurrency,
            timeout_millis=(timeout if timeout is not None else self.timeout) * 1000,
            stagger_millis=self.stagger_millis,
            readiness=self.readiness,
            headless=self.headless,
            browser_args=tuple(self.browser_args),
        )


@lru_cache()
def get_config() -> Config:
    """Get cached config instance."""

    return Config()
