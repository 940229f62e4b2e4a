"""Heuristic personal-safety risk scoring."""

import copy
import random
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

import structlog
import yaml

from safeher.config import ScoringConfig
from safeher.errors import InternalComputationFailure
from safeher.geo_utils import Coordinate
from safeher.risk.providers import LocationRiskProvider, RandomLocationRiskProvider

logger = structlog.get_logger()


class RiskLevel(str, Enum):
    """Classification attached to a risk score."""

    SAFE = "Safe"
    MODERATE = "Moderate"
    UNSAFE = "Unsafe"
    UNKNOWN = "Unknown"


@dataclass(frozen=True)
class Weather:
    """Current weather conditions; any field may be missing."""

    visibility: float | None = None  # meters
    precipitation: float | None = None  # mm/h
    temperature: float | None = None  # degrees C


@dataclass(frozen=True)
class RiskFactors:
    """Context flags supplied by the caller. Absent/False means no contribution."""

    is_alone: bool = False
    is_dark_area: bool = False
    is_poor_lighting: bool = False
    has_recent_incidents: bool = False
    is_weekend: bool = False
    weather: Weather | None = None
    is_stationary: bool = False
    stationary_time_ms: int = 0
    speed: float | None = None  # km/h
    is_distracted: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RiskFactors":
        """Create RiskFactors from a dictionary, ignoring unknown keys."""
        weather = data.get("weather")
        return cls(
            is_alone=bool(data.get("is_alone", False)),
            is_dark_area=bool(data.get("is_dark_area", False)),
            is_poor_lighting=bool(data.get("is_poor_lighting", False)),
            has_recent_incidents=bool(data.get("has_recent_incidents", False)),
            is_weekend=bool(data.get("is_weekend", False)),
            weather=Weather(**weather) if weather else None,
            is_stationary=bool(data.get("is_stationary", False)),
            stationary_time_ms=int(data.get("stationary_time_ms", 0)),
            speed=data.get("speed"),
            is_distracted=bool(data.get("is_distracted", False)),
        )


@dataclass(frozen=True)
class RiskAssessment:
    """Result of a single risk assessment."""

    level: RiskLevel
    score: float
    factors: Mapping[str, float] = field(default_factory=dict)
    recommendations: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "factors", MappingProxyType(dict(self.factors)))

    @classmethod
    def unknown(cls) -> "RiskAssessment":
        """The result returned when the score could not be computed."""
        return cls(
            level=RiskLevel.UNKNOWN,
            score=0.0,
            factors={},
            recommendations=("Unable to assess risk level",),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serialisable dictionary."""
        return {
            "level": self.level.value,
            "score": self.score,
            "factors": dict(self.factors),
            "recommendations": list(self.recommendations),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RiskAssessment":
        return cls(
            level=RiskLevel(data["level"]),
            score=float(data["score"]),
            factors={k: float(v) for k, v in data.get("factors", {}).items()},
            recommendations=tuple(data.get("recommendations", [])),
        )


# Default scoring configuration.
# The flat bonuses repeat flags already used by the environmental and behavioral
# sub-scores; the 40/70 level thresholds were tuned with that double count in place.
DEFAULT_SCORING = {
    "weights": {
        "time": 0.4,
        "location": 0.3,
        "environmental": 0.2,
        "behavioral": 0.1,
    },
    "time": {
        "night_start_hour": 22,
        "night_end_hour": 5,
        "night_points": 80,
        "dusk_start_hour": 18,
        "dawn_end_hour": 7,
        "dusk_dawn_points": 40,
        "day_points": 10,
        "weekend_days": [5, 6],  # datetime.weekday(): Saturday, Sunday
        "weekend_points": 20,
    },
    "environmental": {
        "low_visibility_m": 1000,
        "low_visibility_points": 30,
        "precipitation_points": 20,
        "freezing_points": 10,
        "dark_area_points": 40,
        "poor_lighting_points": 25,
    },
    "behavioral": {
        "stationary_threshold_ms": 300000,  # 5 minutes
        "stationary_points": 30,
        "fast_speed_kmh": 50,
        "fast_speed_points": 20,
        "alone_points": 25,
        "distracted_points": 15,
    },
    "bonuses": {
        "is_alone": 10,
        "is_dark_area": 15,
        "has_recent_incidents": 20,
        "is_weekend": 5,
    },
    # Checked in order; first level whose min_score is reached wins.
    "risk_levels": [
        {"name": "Unsafe", "min_score": 70},
        {"name": "Moderate", "min_score": 40},
        {"name": "Safe", "min_score": 0},
    ],
    "recommendations": {
        "Unsafe": [
            "🚨 HIGH RISK: Leave the area immediately",
            "📞 Call emergency services if needed",
            "🏃 Move to a well-lit, populated area",
            "👥 Stay with trusted people if possible",
        ],
        "Moderate": [
            "⚠️ MODERATE RISK: Stay alert and aware",
            "📍 Share your location with trusted contacts",
            "🔦 Stay in well-lit areas",
            "📱 Keep your phone accessible",
        ],
        "Safe": [
            "✅ SAFE: Continue with normal precautions",
            "👀 Stay aware of your surroundings",
            "📱 Keep emergency contacts ready",
        ],
    },
}


def _clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


class RiskScorer:
    """Risk scoring engine with configurable weights and thresholds."""

    def __init__(
        self,
        config: dict[str, Any] | None = None,
        config_path: Path | None = None,
        location_provider: LocationRiskProvider | None = None,
    ):
        """Initialize the scorer with optional configuration.

        Args:
            config: Scoring configuration overrides.
            config_path: Path to a risk_scoring.yaml file.
            location_provider: Source of the location sub-score. Defaults to
                the random placeholder provider.
        """
        self.config = copy.deepcopy(DEFAULT_SCORING)
        self.location_provider = location_provider or RandomLocationRiskProvider()

        if config_path and config_path.exists():
            with open(config_path) as f:
                yaml_config = yaml.safe_load(f)
                if yaml_config:
                    self._merge_config(yaml_config)

        if config:
            self._merge_config(config)

    @classmethod
    def from_settings(cls, settings: ScoringConfig) -> "RiskScorer":
        """Build a scorer from the application scoring settings."""
        rng = random.Random(settings.location_risk_seed)
        return cls(
            config_path=Path(settings.config_path) if settings.config_path else None,
            location_provider=RandomLocationRiskProvider(rng=rng),
        )

    def _merge_config(self, config: dict[str, Any]) -> None:
        """Merge configuration into current config."""
        for key, value in config.items():
            if key not in self.config:
                logger.warning("Ignoring unknown scoring config key", key=key)
                continue
            if isinstance(self.config[key], dict) and isinstance(value, dict):
                self.config[key].update(value)
            else:
                self.config[key] = value

    def assess(
        self,
        coordinate: Coordinate,
        factors: RiskFactors | None = None,
        now: datetime | None = None,
    ) -> RiskAssessment:
        """Assess the personal-safety risk at a coordinate.

        Never raises: any fault inside the pipeline is logged and turned into
        an assessment with level Unknown.

        Args:
            coordinate: Where the user is.
            factors: Context flags; defaults to no flags set.
            now: Assessment time; defaults to the current local time.

        Returns:
            RiskAssessment with score, level, sub-scores and recommendations.
        """
        factors = factors or RiskFactors()
        now = now or datetime.now()

        try:
            return self._assess(coordinate, factors, now)
        except Exception as e:
            failure = e if isinstance(e, InternalComputationFailure) else InternalComputationFailure("assess", e)
            logger.error(
                "Risk assessment failed",
                stage=failure.stage,
                error=str(failure.cause),
                latitude=coordinate.latitude,
                longitude=coordinate.longitude,
            )
            return RiskAssessment.unknown()

    def _assess(self, coordinate: Coordinate, factors: RiskFactors, now: datetime) -> RiskAssessment:
        weights = self.config["weights"]

        time_risk = self._score_time(now)
        location_risk = self._score_location(coordinate)
        environmental_risk = self._score_environmental(factors)
        behavioral_risk = self._score_behavioral(factors)

        score = (
            time_risk * weights["time"]
            + location_risk * weights["location"]
            + environmental_risk * weights["environmental"]
            + behavioral_risk * weights["behavioral"]
        )
        score += self._flat_bonus(factors)
        score = _clamp(score)

        level = self._get_risk_level(score)

        logger.debug(
            "Risk assessed",
            level=level.value,
            score=round(score, 2),
            time=time_risk,
            location=round(location_risk, 2),
            environmental=environmental_risk,
            behavioral=behavioral_risk,
        )

        return RiskAssessment(
            level=level,
            score=score,
            factors={
                "time": time_risk,
                "location": location_risk,
                "environmental": environmental_risk,
                "behavioral": behavioral_risk,
            },
            recommendations=tuple(self.config["recommendations"][level.value]),
        )

    def _score_time(self, now: datetime) -> float:
        """Score based on hour of day and day of week."""
        config = self.config["time"]
        hour = now.hour

        if hour >= config["night_start_hour"] or hour <= config["night_end_hour"]:
            risk = config["night_points"]
        elif hour >= config["dusk_start_hour"] or hour <= config["dawn_end_hour"]:
            risk = config["dusk_dawn_points"]
        else:
            risk = config["day_points"]

        if now.weekday() in config["weekend_days"]:
            risk += config["weekend_points"]

        return _clamp(float(risk))

    def _score_location(self, coordinate: Coordinate) -> float:
        """Score from the pluggable location risk provider."""
        try:
            risk = self.location_provider.location_risk(coordinate)
        except Exception as e:
            raise InternalComputationFailure("location_risk", e) from e
        return _clamp(float(risk))

    def _score_environmental(self, factors: RiskFactors) -> float:
        """Score based on weather and lighting."""
        config = self.config["environmental"]
        risk = 0

        weather = factors.weather
        if weather is not None:
            if weather.visibility is not None and weather.visibility < config["low_visibility_m"]:
                risk += config["low_visibility_points"]
            if weather.precipitation is not None and weather.precipitation > 0:
                risk += config["precipitation_points"]
            if weather.temperature is not None and weather.temperature < 0:
                risk += config["freezing_points"]

        if factors.is_dark_area:
            risk += config["dark_area_points"]
        if factors.is_poor_lighting:
            risk += config["poor_lighting_points"]

        return _clamp(float(risk))

    def _score_behavioral(self, factors: RiskFactors) -> float:
        """Score based on movement and social context."""
        config = self.config["behavioral"]
        risk = 0

        if factors.is_stationary and factors.stationary_time_ms > config["stationary_threshold_ms"]:
            risk += config["stationary_points"]
        if factors.speed is not None and factors.speed > config["fast_speed_kmh"]:
            risk += config["fast_speed_points"]
        if factors.is_alone:
            risk += config["alone_points"]
        if factors.is_distracted:
            risk += config["distracted_points"]

        return _clamp(float(risk))

    def _flat_bonus(self, factors: RiskFactors) -> float:
        """Points added directly on top of the weighted sum."""
        bonus = 0
        for flag, points in self.config["bonuses"].items():
            if getattr(factors, flag, False):
                bonus += points
        return float(bonus)

    def _get_risk_level(self, score: float) -> RiskLevel:
        """Get risk level from score."""
        for level in self.config["risk_levels"]:
            if score >= level["min_score"]:
                return RiskLevel(level["name"])
        return RiskLevel.SAFE


# Convenience function with default scorer
def assess_risk(
    coordinate: Coordinate,
    factors: RiskFactors | None = None,
    now: datetime | None = None,
) -> RiskAssessment:
    """Assess risk using the default scorer."""
    scorer = RiskScorer()
    return scorer.assess(coordinate, factors, now)
