import yaml
import os
from typing import Optional
from pydantic import BaseModel, Field, model_validator


class ExtractionConfig(BaseModel):
    """Configuration for raw document text extraction."""
    max_chars: int = 50000  # Extracted text is truncated beyond this length
    txt_encoding: str = "utf-8"
    antiword_path: str = "antiword"  # Legacy .doc decoder binary
    antiword_timeout_seconds: int = 30


class ScorerConfig(BaseModel):
    """
    Configuration for the dimension scorers.

    overall_score = weight_skills * skills + weight_experience * experience
                    + weight_education * education
    """
    weight_skills: float = 0.35
    weight_experience: float = 0.40
    weight_education: float = 0.25

    @model_validator(mode="after")
    def _weights_sum_to_one(self):
        total = self.weight_skills + self.weight_experience + self.weight_education
        if abs(total - 1.0) > 1e-6:
            raise ValueError(f"Overall weights must sum to 1.0, got {total}")
        return self


class AnalysisConfig(BaseModel):
    """Configuration for the analysis orchestrator."""
    # Reject a second in-flight run of the same analysis for the same document
    admission_control: bool = True
    version: str = "1.0.0"
    algorithm: str = "rule_based"


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class AppConfig(BaseModel):
    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)
    scorer: ScorerConfig = Field(default_factory=ScorerConfig)
    analysis: AnalysisConfig = Field(default_factory=AnalysisConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_config(config_path: str = "config.yaml") -> AppConfig:
    # If not found at relative path (e.g. running from another directory), try the repo root
    if not os.path.exists(config_path):
        base_dir = os.path.dirname(os.path.abspath(__file__))
        config_path = os.path.join(base_dir, "..", "config.yaml")

    data = {}
    if os.path.exists(config_path):
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}

    # Allow env var override for log level
    env_log_level = os.environ.get("CV_ANALYZER_LOG_LEVEL")
    if env_log_level:
        data.setdefault('logging', {})
        data['logging']['level'] = env_log_level

    # Allow env var override for the antiword binary
    env_antiword = os.environ.get("ANTIWORD_PATH")
    if env_antiword:
        data.setdefault('extraction', {})
        data['extraction']['antiword_path'] = env_antiword

    env_admission = os.environ.get("CV_ANALYZER_ADMISSION_CONTROL")
    if env_admission:
        data.setdefault('analysis', {})
        data['analysis']['admission_control'] = env_admission.strip().lower() in ("1", "true", "yes", "on")

    return AppConfig(**data)


def get_default_config() -> AppConfig:
    """Return a configuration built purely from model defaults."""
    return AppConfig()
