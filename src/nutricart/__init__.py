"""NutriCart: shopping list, pantry tracking and rule-based grocery suggestions."""

__version__ = "0.1.0"

# Core exports
from nutricart.core.models import (
    GroceryItem,
    InventoryItem,
    ItemCategory,
    Suggestion,
    SuggestionType,
    HealthSwapResult,
    Prediction,
)
from nutricart.core.interfaces import (
    Clock,
    IdSupplier,
    StateStore,
    ExpiryEstimatorProtocol,
    ExpiringDetector,
    RebuyDetectorProtocol,
)
from nutricart.core.clock import FixedClock, SystemClock, UuidSupplier
from nutricart.core.expiry import ExpiryEstimator, estimate_expiry
from nutricart.core.detect_expiring import ExpiringItemDetector
from nutricart.core.detect_rebuy import RebuyDetector
from nutricart.core.health_swap import HealthSwapAdvisor
from nutricart.core.predict_missing import MissingItemPredictor
from nutricart.core.engine import SuggestionEngine
from nutricart.core.household import Household

__all__ = [
    "GroceryItem",
    "InventoryItem",
    "ItemCategory",
    "Suggestion",
    "SuggestionType",
    "HealthSwapResult",
    "Prediction",
    "Clock",
    "IdSupplier",
    "StateStore",
    "ExpiryEstimatorProtocol",
    "ExpiringDetector",
    "RebuyDetectorProtocol",
    "FixedClock",
    "SystemClock",
    "UuidSupplier",
    "ExpiryEstimator",
    "estimate_expiry",
    "ExpiringItemDetector",
    "RebuyDetector",
    "HealthSwapAdvisor",
    "MissingItemPredictor",
    "SuggestionEngine",
    "Household",
]
