"""
Ranking configuration: blend weights, distance falloff, and list limits.

RankingConfig defaults are defined here. The server may pass a dict
(e.g. from a JSON file named by RANKING_CONFIG_PATH); from_dict() merges it with these defaults.
"""

from typing import Dict, Optional

from pydantic import BaseModel, model_validator


class RankingConfig(BaseModel):
    """Configuration for the weighted product ranking."""

    # -------------------------------------------------------------------------
    # Blended Scoring Weights (must sum to 1.0)
    # score = rating_weight * normalized_rating + distance_weight * distance_factor
    # -------------------------------------------------------------------------

    # Weight for the seller's average rating. Higher = better-rated sellers favored.
    rating_weight: float = 0.6
    # Weight for proximity to the buyer. Only applied when the buyer sent a location.
    distance_weight: float = 0.4

    # -------------------------------------------------------------------------
    # Distance Factor
    # factor = 1 - distance_km / max_distance_km, 0 beyond max_distance_km
    # -------------------------------------------------------------------------

    max_distance_km: float = 100.0
    earth_radius_km: float = 6371.0

    # Ratings are stored on a 0-5 star scale.
    max_rating: float = 5.0

    # -------------------------------------------------------------------------
    # Limits
    # -------------------------------------------------------------------------

    # Max candidates fetched from the product store before ranking.
    candidate_limit: int = 200
    # Max products returned to the caller after ranking.
    output_limit: int = 50

    @model_validator(mode="after")
    def weights_sum_to_one(self):
        total = self.rating_weight + self.distance_weight
        if abs(total - 1.0) > 0.01:
            raise ValueError(f"Scoring weights must sum to 1.0, got {total}")
        if self.max_distance_km <= 0:
            raise ValueError("max_distance_km must be positive")
        if self.max_rating <= 0:
            raise ValueError("max_rating must be positive")
        if self.output_limit < 0 or self.candidate_limit < 0:
            raise ValueError("Limits must not be negative")
        return self

    @classmethod
    def from_dict(cls, config_dict: Dict) -> "RankingConfig":
        """Create config from dictionary (e.g., loaded from JSON)."""
        flat = {}
        if "weights" in config_dict:
            w = config_dict["weights"]
            if "rating" in w:
                flat["rating_weight"] = w["rating"]
            if "distance" in w:
                flat["distance_weight"] = w["distance"]
        if "limits" in config_dict:
            lim = config_dict["limits"]
            if "candidates" in lim:
                flat["candidate_limit"] = lim["candidates"]
            if "output" in lim:
                flat["output_limit"] = lim["output"]
        flat.update({k: v for k, v in config_dict.items() if k not in ("weights", "limits")})
        allowed = set(cls.model_fields)
        filtered = {k: v for k, v in flat.items() if k in allowed}
        return cls.model_validate(filtered)


DEFAULT_CONFIG = RankingConfig()


def resolve_config(config: Optional["RankingConfig"]) -> "RankingConfig":
    """Return config or DEFAULT_CONFIG when none is provided."""
    return config if config is not None else DEFAULT_CONFIG
