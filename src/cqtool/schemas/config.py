"""Configuration schema — validates cqtool.yml."""

from pydantic import BaseModel, Field, model_validator

from cqtool.schemas.request import AnalysisKind

GROQ_BASE_URL = "https://api.groq.com/openai/v1"
DEFAULT_MODEL = "llama-3.1-8b-instant"


class KindSettings(BaseModel):
    """Model parameters for one analysis kind."""

    model: str = DEFAULT_MODEL
    temperature: float = Field(default=0.1, ge=0.0, le=2.0)
    max_tokens: int = Field(default=2000, gt=0)


def _default_kinds() -> dict[AnalysisKind, KindSettings]:
    return {
        AnalysisKind.COMPREHENSIVE: KindSettings(temperature=0.3, max_tokens=2500),
        AnalysisKind.SYNTAX: KindSettings(temperature=0.1, max_tokens=2000),
        AnalysisKind.COMPLEXITY: KindSettings(temperature=0.1, max_tokens=2000),
        AnalysisKind.TESTGEN: KindSettings(model="compound-beta-mini", temperature=0.1, max_tokens=1500),
        AnalysisKind.IMPROVEMENT: KindSettings(temperature=0.2, max_tokens=1500),
        AnalysisKind.EXECUTION_SIMULATION: KindSettings(temperature=0.0, max_tokens=1000),
        AnalysisKind.JUDGE: KindSettings(model="compound-beta-mini", temperature=0.1, max_tokens=1500),
        AnalysisKind.RECOMMENDATION: KindSettings(temperature=0.3, max_tokens=1000),
    }


class ServiceConfig(BaseModel):
    """Top-level configuration loaded from cqtool.yml.

    Every field has a default, so an empty file (or no file) is valid.
    Kinds missing from ``kinds`` keep their built-in settings.
    """

    base_url: str = GROQ_BASE_URL
    kinds: dict[AnalysisKind, KindSettings] = Field(default_factory=_default_kinds)

    # Cache
    cache_capacity: int = Field(default=50, gt=0)

    # Upstream call policy
    request_timeout: float = Field(default=20.0, gt=0)  # seconds, per attempt
    max_retries: int = Field(default=2, ge=0)
    retry_delay: float = Field(default=1.0, ge=0)  # seconds, fixed

    # HTTP
    cors_origins: list[str] = ["*"]
    host: str = "127.0.0.1"
    port: int = Field(default=8000, gt=0, lt=65536)

    @model_validator(mode="after")
    def fill_missing_kinds(self) -> "ServiceConfig":
        defaults = _default_kinds()
        for kind, settings in defaults.items():
            self.kinds.setdefault(kind, settings)
        return self

    def settings_for(self, kind: AnalysisKind) -> KindSettings:
        return self.kinds[kind]
