"""Risk scoring, movement analysis and safety advice."""

from safeher.risk.advice import generate_safety_recommendations, quick_location_risk, safety_status_message
from safeher.risk.movement import MovementAnalysis, analyze_movement_patterns
from safeher.risk.providers import FixedLocationRiskProvider, LocationRiskProvider, RandomLocationRiskProvider
from safeher.risk.scoring import RiskAssessment, RiskFactors, RiskLevel, RiskScorer, Weather, assess_risk

__all__ = [
    "assess_risk",
    "RiskScorer",
    "RiskAssessment",
    "RiskFactors",
    "RiskLevel",
    "Weather",
    # Location risk providers
    "LocationRiskProvider",
    "RandomLocationRiskProvider",
    "FixedLocationRiskProvider",
    # Supplementary analysis
    "analyze_movement_patterns",
    "MovementAnalysis",
    "generate_safety_recommendations",
    "quick_location_risk",
    "safety_status_message",
]
