# lambdas/upload_notifier/models.py
"""
Pydantic models and settings for the Upload Notifier.
"""
from enum import Enum
from typing import Literal
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Manages env vars using Pydantic BaseSettings.
    It would automatically read a .env file for local runs.
    """
    model_config = SettingsConfigDict(env_file='.env', env_file_encoding='utf-8', extra='ignore')

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field("INFO", alias='LOG_LEVEL')
    logger_name: str = Field("upload_notifier", alias='NOTIFIER_LOGGER_NAME')
    # Echo the full inbound payload once per invocation
    echo_payload: bool = Field(True, alias='ECHO_PAYLOAD')


@lru_cache
def get_settings() -> AppSettings:
    """Returns a single, shared settings instance."""
    return AppSettings()


class ProcessingStatus(str, Enum):
    PROCESSED = "processed"
    PARTIAL = "partial"
    FAILED = "failed"


class NotificationRecord(BaseModel):
    """
    One object-creation event, validated out of a raw S3 notification record.
    """
    model_config = ConfigDict(frozen=True)

    event_name: StrictStr = Field(..., min_length=1)
    bucket_name: StrictStr = Field(..., min_length=1)
    object_key: StrictStr = Field(..., min_length=1)
    # byte count; bools and numeric strings are rejected by StrictInt
    object_size: StrictInt = Field(..., ge=0)

    def to_log_entry(self) -> dict:
        """The fixed-shape entry written for each valid record."""
        return {
            "bucket": self.bucket_name,
            "key": self.object_key,
            "size": self.object_size,
            "event": self.event_name,
        }


class ProcessingResult(BaseModel):
    """
    Summary returned to the invoking platform.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    status: ProcessingStatus
    processed_count: int = Field(0, alias='processedCount')
    rejected_count: int = Field(0, alias='rejectedCount')
    emission_failures: int = Field(0, alias='emissionFailures')

    @classmethod
    def from_counts(cls, total: int, processed: int, rejected: int, emission_failures: int = 0) -> "ProcessingResult":
        if total == 0 or (processed > 0 and rejected + emission_failures == 0):
            status = ProcessingStatus.PROCESSED
        elif processed > 0:
            status = ProcessingStatus.PARTIAL
        else:
            status = ProcessingStatus.FAILED
        return cls(
            status=status,
            processed_count=processed,
            rejected_count=rejected,
            emission_failures=emission_failures,
        )

    @classmethod
    def failed(cls) -> "ProcessingResult":
        return cls(status=ProcessingStatus.FAILED)

    def to_response(self) -> dict:
        """JSON-ready dict; emissionFailures only appears when something failed to log."""
        exclude = set() if self.emission_failures else {"emission_failures"}
        return self.model_dump(mode="json", by_alias=True, exclude=exclude)
