"""Re-export individual schema modules for easy imports."""

from .meal import MealOut, StoreOut
from .plan import GenerateRequest, SlotRequest

__all__ = [
    "MealOut",
    "StoreOut",
    "GenerateRequest",
    "SlotRequest",
]
