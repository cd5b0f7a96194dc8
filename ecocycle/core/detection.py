"""
Simulated e-waste classification.

There is no real inference: ``WasteClassifier`` validates the uploaded
image, picks an entry from a fixed catalog of common devices, perturbs its
confidence and enriches the result with impact estimates.

Dependencies: ecocycle.core.impact
System role: Produces the detection payload recorded by DetectionService
"""

import logging
import random
from dataclasses import dataclass, field

from ecocycle.core.exceptions import FileTooLargeError, UnsupportedImageError
from ecocycle.core.impact import (
    SortingSuggestion,
    clamp,
    compute_co2_saved_kg,
    estimate_weight_kg,
    get_sorting_suggestions,
)

logger = logging.getLogger(__name__)

MIN_CONFIDENCE = 75
MAX_CONFIDENCE = 99
CONFIDENCE_JITTER = 5


@dataclass(frozen=True)
class CatalogItem:
    item: str
    category: str
    confidence: int
    hazard_level: str
    eco_coins: int
    disposal_method: str
    materials: tuple[str, ...]
    recycling_tips: tuple[str, ...]


@dataclass
class DetectionResult:
    """
    Outcome of one simulated classification.

    Attributes:
        item: Detected device name
        category: Waste category
        confidence: Rounded confidence percentage in [75, 99]
        hazard_level: low | medium | high
        eco_coins: EcoCoins awarded when recorded
        disposal_method: How the item should be disposed of
        materials: Notable materials contained
        recycling_tips: Preparation tips
        weight_kg: Estimated weight
        co2_saved_kg: Estimated CO2 saved by recycling
        sorting: Sorting suggestions for the category
    """

    item: str
    category: str
    confidence: int
    hazard_level: str
    eco_coins: int
    disposal_method: str
    materials: list[str]
    recycling_tips: list[str]
    weight_kg: float
    co2_saved_kg: float
    sorting: SortingSuggestion = field(default_factory=lambda: SortingSuggestion([], []))


EWASTE_CATALOG: tuple[CatalogItem, ...] = (
    CatalogItem(
        "iPhone 13 Pro", "Smartphones", 94, "medium", 45,
        "Remove battery, wipe data, recycle at certified e-waste center",
        ("Lithium-ion battery", "Rare earth metals", "Gold", "Silver", "Copper"),
        ("Factory reset before disposal", "Remove SIM card", "Consider trade-in programs"),
    ),
    CatalogItem(
        "Samsung Galaxy S21", "Smartphones", 92, "medium", 42,
        "Data wipe required, battery removal, certified recycling",
        ("Lithium polymer battery", "Aluminum frame", "Glass back", "Copper"),
        ("Use manufacturer take-back program", "Remove memory card", "Check for data encryption"),
    ),
    CatalogItem(
        "Google Pixel 6", "Smartphones", 89, "medium", 38,
        "Secure data erasure, battery separation, e-waste facility",
        ("Lithium-ion battery", "Recycled aluminum", "Corning Glass", "Rare earth elements"),
        ("Use Google's trade-in program", "Enable remote wipe", "Remove protective case"),
    ),
    CatalogItem(
        "MacBook Pro 13-inch", "Laptops", 96, "high", 85,
        "Professional data destruction, battery removal, hazardous material handling",
        ("Lithium polymer battery", "Aluminum body", "Rare earth metals", "Cobalt"),
        ("Use Apple's recycling program", "FileVault encryption", "Remove external devices"),
    ),
    CatalogItem(
        "Dell XPS 13", "Laptops", 93, "high", 78,
        "Secure data wiping, battery disposal, certified e-waste processing",
        ("Lithium-ion battery", "Carbon fiber", "Aluminum", "Magnesium alloy"),
        ("Dell's mail-back program", "BitLocker encryption", "Remove hard drive if possible"),
    ),
    CatalogItem(
        "HP Pavilion Laptop", "Laptops", 91, "high", 72,
        "Data sanitization, battery separation, recycling center disposal",
        ("Lithium-ion battery", "Plastic housing", "Copper wiring", "Lead solder"),
        ("HP's Planet Partners program", "Remove personal data", "Check warranty status"),
    ),
    CatalogItem(
        "iPad Air", "Tablets", 95, "medium", 55,
        "Factory reset, battery care, Apple recycling program",
        ("Lithium polymer battery", "Aluminum body", "Touch sensor glass", "Rare earth metals"),
        ("Sign out of iCloud", "Remove accessories", "Check for trade-in value"),
    ),
    CatalogItem(
        "Samsung Galaxy Tab", "Tablets", 88, "medium", 48,
        "Data encryption, battery removal, certified recycling",
        ("Lithium-ion battery", "Plastic frame", "LCD display", "Copper"),
        ("Samsung's takeback program", "Remove SD card", "Factory reset"),
    ),
    CatalogItem(
        "Laptop Lithium-ion Battery", "Batteries", 97, "high", 35,
        "Specialized battery recycling facility - DO NOT put in regular trash",
        ("Lithium", "Cobalt", "Nickel", "Graphite", "Electrolyte"),
        ("Never puncture or disassemble", "Tape terminals", "Find certified battery recycler"),
    ),
    CatalogItem(
        "Phone Battery Pack", "Batteries", 94, "high", 28,
        "Battery collection point or hazardous waste facility",
        ("Lithium polymer", "Aluminum casing", "Copper contacts", "Electrolyte"),
        ("Check for swelling", "Store in cool, dry place", "Use manufacturer programs"),
    ),
    CatalogItem(
        "USB-C Cable", "Cables", 89, "low", 15,
        "Standard e-waste recycling or donation if functional",
        ("Copper wire", "PVC insulation", "Metal connectors", "Plastic housing"),
        ("Test functionality first", "Bundle with other cables", "Consider donation"),
    ),
    CatalogItem(
        "Power Adapter/Charger", "Chargers", 92, "medium", 22,
        "E-waste facility - contains transformers and capacitors",
        ("Copper transformers", "Plastic housing", "Ferrite cores", "Capacitors"),
        ("Check compatibility for reuse", "Remove from packaging", "Bundle with devices"),
    ),
    CatalogItem(
        "PlayStation Controller", "Gaming", 90, "medium", 32,
        "Battery removal, electronic component recycling",
        ("Lithium-ion battery", "Plastic housing", "Circuit boards", "Rubber buttons"),
        ("Remove rechargeable battery", "Check for firmware updates", "Consider trade-in"),
    ),
    CatalogItem(
        "Wireless Headphones", "Audio", 87, "medium", 25,
        "Battery separation, plastic and metal component recycling",
        ("Lithium-ion battery", "Plastic housing", "Copper wire", "Rare earth magnets"),
        ("Fully discharge battery", "Check warranty status", "Remove ear tips"),
    ),
    CatalogItem(
        "Graphics Card (GPU)", "Computer Parts", 95, "medium", 65,
        "Precious metal recovery, certified e-waste processing",
        ("Gold contacts", "Silver", "Copper", "Plastic housing", "Silicon chips"),
        ("Remove from anti-static bag", "Check for resale value", "Professional recycling recommended"),
    ),
    CatalogItem(
        "Computer Hard Drive", "Storage", 98, "high", 40,
        "Data destruction mandatory, rare earth metal recovery",
        ("Rare earth magnets", "Aluminum platters", "Copper", "Precious metals"),
        ("Professional data destruction", "Remove from computer first", "Never attempt to open"),
    ),
)


def sniff_image_type(data: bytes) -> str | None:
    """
    Identify JPEG, PNG or WebP payloads from their magic bytes.

    Returns:
        str | None: MIME type, or None when unrecognised
    """
    if data.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if data.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if len(data) >= 12 and data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    return None


class WasteClassifier:
    """
    Catalog-backed stand-in for an image classifier.

    Args:
        max_file_size: Largest accepted image in bytes
        rng: Random source (seed it for reproducible picks)
    """

    def __init__(self, max_file_size: int = 10 * 1024 * 1024, rng: random.Random | None = None) -> None:
        self.max_file_size = max_file_size
        self._rng = rng or random.Random()

    def validate_image(self, image_bytes: bytes) -> str:
        """
        Reject oversize or unrecognised images.

        Returns:
            str: Sniffed MIME type

        Raises:
            FileTooLargeError: Payload larger than max_file_size
            UnsupportedImageError: Empty payload or not JPEG/PNG/WebP
        """
        if len(image_bytes) > self.max_file_size:
            raise FileTooLargeError(
                f"File size exceeds {self.max_file_size / 1024 / 1024:.0f}MB limit",
                {"size": len(image_bytes), "max_size": self.max_file_size},
            )
        mime_type = sniff_image_type(image_bytes)
        if mime_type is None:
            raise UnsupportedImageError(details={"size": len(image_bytes)})
        return mime_type

    def classify(self, image_bytes: bytes) -> DetectionResult:
        mime_type = self.validate_image(image_bytes)

        entry = self._rng.choice(EWASTE_CATALOG)
        variation = self._rng.random() * (2 * CONFIDENCE_JITTER) - CONFIDENCE_JITTER
        confidence = clamp(entry.confidence + variation, MIN_CONFIDENCE, MAX_CONFIDENCE)

        weight = estimate_weight_kg(entry.category, entry.item).weight_kg
        result = DetectionResult(
            item=entry.item,
            category=entry.category,
            confidence=int(round(confidence)),
            hazard_level=entry.hazard_level,
            eco_coins=entry.eco_coins,
            disposal_method=entry.disposal_method,
            materials=list(entry.materials),
            recycling_tips=list(entry.recycling_tips),
            weight_kg=weight,
            co2_saved_kg=compute_co2_saved_kg(entry.category, weight),
            sorting=get_sorting_suggestions(entry.category),
        )
        logger.info(
            "Image classified",
            extra={"item": result.item, "category": result.category, "confidence": result.confidence, "mime_type": mime_type},
        )
        return result
