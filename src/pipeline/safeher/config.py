"""Configuration management for the SafeHer core."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv


@dataclass
class ScoringConfig:
    """Risk scoring configuration."""

    config_path: str | None = None  # Optional risk_scoring.yaml override
    location_risk_seed: int | None = None  # Seed for the placeholder location risk provider


@dataclass
class SafePlacesConfig:
    """Safe place lookup configuration."""

    data_path: str | None = None  # None = bundled dataset
    max_distance_m: float = 5000.0
    result_limit: int = 10


@dataclass
class MessagingConfig:
    """Alert message composition configuration."""

    app_name: str = "SafeHer Safety App"
    default_country_code: str = "+1"


@dataclass
class Config:
    """Main configuration container."""

    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    safe_places: SafePlacesConfig = field(default_factory=SafePlacesConfig)
    messaging: MessagingConfig = field(default_factory=MessagingConfig)

    @classmethod
    def load(cls, config_dir: Path | None = None) -> "Config":
        """Load configuration from files and environment variables."""
        # Load .env file if present
        env_file = Path(__file__).parent.parent / ".env"
        if env_file.exists():
            load_dotenv(env_file)

        config = cls()

        if config_dir and config_dir.exists():
            settings_file = config_dir / "settings.yaml"
            if settings_file.exists():
                config._load_yaml(settings_file)

            risk_file = config_dir / "risk_scoring.yaml"
            if risk_file.exists() and config.scoring.config_path is None:
                config.scoring.config_path = str(risk_file)

        # Override with environment variables
        config._load_from_env()

        return config

    def _load_yaml(self, path: Path) -> None:
        """Load configuration from a YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f)
            if data:
                self._apply_yaml_config(data)

    def _apply_yaml_config(self, data: dict[str, Any]) -> None:
        """Apply YAML configuration data."""
        if "scoring" in data:
            scoring = data["scoring"]
            if "config_path" in scoring:
                self.scoring.config_path = scoring["config_path"]
            if "location_risk_seed" in scoring:
                self.scoring.location_risk_seed = int(scoring["location_risk_seed"])

        if "safe_places" in data:
            places = data["safe_places"]
            if "data_path" in places:
                self.safe_places.data_path = places["data_path"]
            if "max_distance_m" in places:
                self.safe_places.max_distance_m = float(places["max_distance_m"])
            if "result_limit" in places:
                self.safe_places.result_limit = int(places["result_limit"])

        if "messaging" in data:
            messaging = data["messaging"]
            if "app_name" in messaging:
                self.messaging.app_name = messaging["app_name"]
            if "default_country_code" in messaging:
                self.messaging.default_country_code = messaging["default_country_code"]

    def _load_from_env(self) -> None:
        """Override configuration from environment variables."""
        # Scoring
        if risk_config := os.getenv("SAFEHER_RISK_CONFIG"):
            self.scoring.config_path = risk_config
        if seed := os.getenv("SAFEHER_LOCATION_RISK_SEED"):
            self.scoring.location_risk_seed = int(seed)

        # Safe places
        if data_path := os.getenv("SAFEHER_SAFE_PLACES_PATH"):
            self.safe_places.data_path = data_path
        if max_distance := os.getenv("SAFEHER_MAX_DISTANCE_M"):
            self.safe_places.max_distance_m = float(max_distance)
        if limit := os.getenv("SAFEHER_RESULT_LIMIT"):
            self.safe_places.result_limit = int(limit)

        # Messaging
        if app_name := os.getenv("SAFEHER_APP_NAME"):
            self.messaging.app_name = app_name
        if country_code := os.getenv("SAFEHER_COUNTRY_CODE"):
            self.messaging.default_country_code = country_code


# Global config instance
_config: Config | None = None


def get_config() -> Config:
    """Get or create the global configuration instance."""
    global _config
    if _config is None:
        config_dir = Path(__file__).parent.parent / "config"
        _config = Config.load(config_dir)
    return _config


def reload_config(config_dir: Path | None = None) -> Config:
    """Reload configuration (useful for testing)."""
    global _config
    _config = Config.load(config_dir)
    return _config
