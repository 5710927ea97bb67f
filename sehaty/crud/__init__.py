from .user import user
from .medicine import medicine, category, active_ingredient
from .pharmacy import pharmacy, pharmacy_medicine
from .review import review
from .prescription import prescription

__all__ = [
    "user", "medicine", "category", "active_ingredient",
    "pharmacy", "pharmacy_medicine", "review", "prescription",
]
