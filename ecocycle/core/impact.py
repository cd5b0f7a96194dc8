"""
Environmental impact estimation.

Static per-category lookup tables for typical item weight, CO2 saved per
kilogram recycled and the EcoCoin rate, plus the helpers built on them.
Weight estimates carry a small deterministic jitter derived from the item
name so the same item always yields the same estimate.

Dependencies: None (pure domain layer)
System role: Arithmetic behind detections, bookings and dashboards
"""

import math
from dataclasses import dataclass, field

WASTE_CATEGORIES: tuple[str, ...] = (
    "Smartphones",
    "Laptops",
    "Tablets",
    "Batteries",
    "Cables",
    "Chargers",
    "Gaming",
    "Audio",
    "Computer Parts",
    "Storage",
)

# (min, max, avg) in kg
TYPICAL_WEIGHTS_KG: dict[str, tuple[float, float, float]] = {
    "Smartphones": (0.12, 0.25, 0.18),
    "Laptops": (1.0, 2.5, 1.8),
    "Tablets": (0.3, 0.8, 0.5),
    "Batteries": (0.05, 0.8, 0.3),
    "Cables": (0.05, 0.3, 0.12),
    "Chargers": (0.08, 0.4, 0.2),
    "Gaming": (0.2, 0.5, 0.35),
    "Audio": (0.15, 0.4, 0.25),
    "Computer Parts": (0.2, 1.2, 0.7),
    "Storage": (0.15, 0.7, 0.35),
}
DEFAULT_WEIGHT_KG = (0.2, 1.0, 0.5)

# kg CO2 saved per kg recycled
CO2_SAVED_FACTOR: dict[str, float] = {
    "Smartphones": 6.5,
    "Laptops": 10.0,
    "Tablets": 7.0,
    "Batteries": 3.0,
    "Cables": 2.0,
    "Chargers": 3.0,
    "Gaming": 4.0,
    "Audio": 3.5,
    "Computer Parts": 5.0,
    "Storage": 5.5,
}
DEFAULT_CO2_FACTOR = 4.0

ECO_COINS_PER_KG: dict[str, int] = {
    "Smartphones": 200,
    "Laptops": 120,
    "Tablets": 150,
    "Batteries": 100,
    "Cables": 60,
    "Chargers": 80,
    "Gaming": 110,
    "Audio": 90,
    "Computer Parts": 140,
    "Storage": 160,
}
DEFAULT_COINS_PER_KG = 100

HAZARD_COIN_BOOST = {"high": 1.2, "medium": 1.05}
MIN_PREDICTED_COINS = 8
MAX_PREDICTED_COINS = 300

# A mature tree absorbs roughly 21.77 kg CO2 per year.
KG_CO2_PER_TREE_YEAR = 21.77
KWH_PER_KG = 50
LITERS_PER_KG = 1000


@dataclass(frozen=True)
class WeightEstimate:
    weight_kg: float
    confidence: float


@dataclass(frozen=True)
class SortingSuggestion:
    """Preparation steps and safety notes for handing an item over."""

    steps: list[str]
    safety: list[str]
    donate_or_resell: list[str] = field(default_factory=list)


def clamp(n: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, n))


def _name_hash(text: str) -> int:
    """31-based rolling string hash wrapped to signed 32 bits."""
    h = 0
    for ch in text:
        h = (h * 31 + ord(ch)) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return h


def estimate_weight_kg(category: str, item_name: str | None = None) -> WeightEstimate:
    """
    Estimate an item's weight from its category.

    Args:
        category: Waste category (unknown categories use a generic range)
        item_name: Optional item name; adds a stable jitter in [-0.05, 0.05]
            scaled by the category's weight spread

    Returns:
        WeightEstimate: Weight rounded to 2 dp, confidence in [70, 95]
    """
    lo, hi, avg = TYPICAL_WEIGHTS_KG.get(category, DEFAULT_WEIGHT_KG)
    variance = 0.0
    if item_name:
        unsigned = _name_hash(item_name) & 0xFFFFFFFF
        variance = (unsigned % 100) / 1000 - 0.05

    spread = hi - lo
    estimate = clamp(avg + variance * spread, lo, hi)
    # tighter ranges give more confident estimates
    confidence = clamp(100 - spread * 100, 70, 95)
    return WeightEstimate(weight_kg=round(estimate, 2), confidence=confidence)


def compute_co2_saved_kg(category: str, weight_kg: float) -> float:
    """CO2 saved = weight × category factor, rounded to 2 dp."""
    factor = CO2_SAVED_FACTOR.get(category, DEFAULT_CO2_FACTOR)
    return round(factor * weight_kg, 2)


def predict_eco_coins(category: str, weight_kg: float, hazard_level: str | None = None) -> int:
    """
    Predict the EcoCoins an item is worth.

    Hazardous items earn a boost (high ×1.2, medium ×1.05). The result is
    clamped to [8, 300].
    """
    base_rate = ECO_COINS_PER_KG.get(category, DEFAULT_COINS_PER_KG)
    boost = HAZARD_COIN_BOOST.get(hazard_level or "", 1.0)
    raw = base_rate * weight_kg * boost
    return int(math.floor(clamp(raw, MIN_PREDICTED_COINS, MAX_PREDICTED_COINS) + 0.5))


def get_sorting_suggestions(category: str) -> SortingSuggestion:
    if category == "Smartphones":
        return SortingSuggestion(
            steps=[
                "Backup and factory reset the device",
                "Remove SIM and memory cards",
                "Detach any cases or accessories",
                "Place in a padded envelope or box",
            ],
            safety=[
                "Do not puncture or bend the device",
                "Keep away from heat due to lithium battery",
            ],
            donate_or_resell=["Consider trade-in or donation if functional"],
        )
    if category == "Laptops":
        return SortingSuggestion(
            steps=[
                "Securely wipe or remove storage drive",
                "Bundle charger separately",
                "Close lid and protect screen",
            ],
            safety=["Avoid crushing battery areas", "Handle damaged batteries with care"],
            donate_or_resell=["Remove personal stickers and data before donation/resale"],
        )
    if category == "Batteries":
        return SortingSuggestion(
            steps=["Tape terminals individually", "Place in clear bag", "Drop only at battery points"],
            safety=["Never dispose in general trash", "Do not charge swollen/damaged cells"],
        )
    return SortingSuggestion(
        steps=["Group similar items together", "Remove cables and accessories", "Clean surface dust"],
        safety=["Avoid moisture exposure", "Use a sturdy box for sharp edges"],
    )


def trees_equivalent(co2_kg: float) -> float:
    return round(co2_kg / KG_CO2_PER_TREE_YEAR, 2)


def energy_equivalent_kwh(weight_kg: float) -> float:
    return round(weight_kg * KWH_PER_KG, 1)


def water_saved_liters(weight_kg: float) -> int:
    return int(math.floor(weight_kg * LITERS_PER_KG + 0.5))
