"""
Retail Insights Reporting Layer
Centralized Configuration Management

Configuration is read from environment variables (and an optional .env file)
through Pydantic settings, validated once and cached for the process.
"""

from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ReportSettings(BaseSettings):
    """Parameters of the fixed business reports"""

    model_config = SettingsConfigDict(env_prefix="REPORT_")

    comparison_years: List[int] = Field(
        default=[2022, 2023],
        description="The two years compared by the year-over-year reports (earlier first)",
    )
    top_products_limit: int = Field(default=10, ge=1, description="Rows kept by the top revenue products report")
    top_sellers_per_region: int = Field(default=5, ge=1, description="Products kept per region")
    sum_precision: int = Field(
        default=38,
        ge=1,
        description="Significant digits available to sums before they are reported as overflow",
    )
    output_places: int = Field(default=2, ge=0, description="Decimal places of pivoted output values")

    @field_validator("comparison_years")
    @classmethod
    def validate_years(cls, v: List[int]) -> List[int]:
        """Exactly two distinct years"""
        if len(v) != 2 or v[0] == v[1]:
            raise ValueError("comparison_years must hold exactly two distinct years")
        return v

    @property
    def year_pair(self) -> tuple:
        """Compared years as (year_a, year_b)"""
        return self.comparison_years[0], self.comparison_years[1]


class DataSettings(BaseSettings):
    """Fact table source configuration"""

    model_config = SettingsConfigDict(env_prefix="DATA_")

    orders_path: str = Field(default="./data/orders.csv", description="Path of the cleaned order-lines table")
    file_format: str = Field(default="csv", description="File format: csv or parquet")

    @field_validator("file_format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        """Validate file format value"""
        allowed = ["csv", "parquet"]
        if v.lower() not in allowed:
            raise ValueError(f"File format must be one of: {allowed}")
        return v.lower()


class MonitoringSettings(BaseSettings):
    """Logging Configuration"""

    model_config = SettingsConfigDict(env_prefix="", populate_by_name=True)

    log_level: str = Field(default="INFO", alias="LOG_LEVEL", description="Logging level")
    log_format: str = Field(default="json", alias="LOG_FORMAT", description="Log format: json or text")
    log_file: Optional[str] = Field(default=None, description="Log file path")


class Settings(BaseSettings):
    """
    Main Application Settings

    Aggregates all configuration sections and provides a single entry point
    for accessing application configuration.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Application
    app_name: str = Field(default="retail-insights", alias="APP_NAME", description="Application name")
    app_env: str = Field(default="development", alias="APP_ENV", description="Environment")
    debug: bool = Field(default=False, alias="DEBUG", description="Debug mode")

    # API Server
    api_host: str = Field(default="0.0.0.0", alias="API_HOST", description="API host")
    api_port: int = Field(default=8000, alias="API_PORT", description="API port")

    # Version
    version: str = Field(default="1.0.0", description="Application version")

    # Subsystem configurations
    reports: ReportSettings = Field(default_factory=ReportSettings)
    data: DataSettings = Field(default_factory=DataSettings)
    monitoring: MonitoringSettings = Field(default_factory=MonitoringSettings)

    @field_validator("app_env")
    @classmethod
    def validate_env(cls, v: str) -> str:
        """Validate environment value"""
        allowed = ["development", "staging", "production", "testing"]
        if v.lower() not in allowed:
            raise ValueError(f"Environment must be one of: {allowed}")
        return v.lower()

    @property
    def is_production(self) -> bool:
        """Check if running in production"""
        return self.app_env == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development"""
        return self.app_env == "development"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses LRU cache to ensure settings are only loaded once.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
