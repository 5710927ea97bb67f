from typing import Optional, List, Literal
from pydantic import BaseModel, Field
from datetime import datetime

from .review import Review

# Keys accepted by PUT /medicines/{id}; anything else is rejected as an invalid update
ALLOWED_MEDICINE_UPDATES = {
    "name", "generic_name", "description", "concentration",
    "manufacturer", "active_ingredient_id", "medicine_type",
    "side_effects", "usage_instruction", "storage_condition",
    "price", "discount", "available_stock", "is_available",
    "prescription_required", "alternatives",
}


class CategoryCreate(BaseModel):
    name: str
    description: Optional[str] = None


class Category(CategoryCreate):
    id: int

    class Config:
        from_attributes = True


class ActiveIngredientCreate(BaseModel):
    name: str
    description: Optional[str] = None


class ActiveIngredient(ActiveIngredientCreate):
    id: int

    class Config:
        from_attributes = True


# Shared properties
class MedicineBase(BaseModel):
    name: str = Field(..., description="Trade name of the medicine")
    generic_name: Optional[str] = None
    description: Optional[str] = None
    concentration: Optional[str] = Field(None, description="Strength, e.g. 500mg")
    manufacturer: Optional[str] = None
    medicine_type: Optional[str] = Field(None, description="tablet, syrup, capsule, ...")
    image: Optional[str] = None
    price: float = Field(0.0, ge=0)
    discount: float = Field(0.0, ge=0)
    available_stock: int = Field(0, ge=0)
    is_available: bool = True
    prescription_required: bool = False
    side_effects: Optional[str] = None
    usage_instruction: Optional[str] = None
    storage_condition: Optional[str] = None
    category_id: Optional[int] = None
    active_ingredient_id: Optional[int] = None


class MedicineCreate(MedicineBase):
    alternatives: List[int] = Field(default_factory=list, description="Curated substitute medicine ids")


class MedicineUpdate(BaseModel):
    name: Optional[str] = None
    generic_name: Optional[str] = None
    description: Optional[str] = None
    concentration: Optional[str] = None
    manufacturer: Optional[str] = None
    active_ingredient_id: Optional[int] = None
    medicine_type: Optional[str] = None
    side_effects: Optional[str] = None
    usage_instruction: Optional[str] = None
    storage_condition: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    discount: Optional[float] = Field(None, ge=0)
    available_stock: Optional[int] = Field(None, ge=0)
    is_available: Optional[bool] = None
    prescription_required: Optional[bool] = None
    alternatives: Optional[List[int]] = None


class Medicine(MedicineBase):
    id: int
    rating: float = 0.0
    total_reviews: int = 0
    alternative_ids: List[int] = []
    is_deleted: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PharmacyInfo(BaseModel):
    """Live inventory of one pharmacy listing, overlaid onto a medicine"""
    pharmacy_id: int
    pharmacy_name: str
    price: float
    stock: int
    discount: float
    is_available: bool


class MedicineWithPharmacy(Medicine):
    pharmacy_info: PharmacyInfo

    @classmethod
    def from_listing(cls, medicine, listing) -> "MedicineWithPharmacy":
        """Medicine record overlaid with one pharmacy listing's price and stock"""
        data = Medicine.model_validate(medicine).model_dump()
        data["pharmacy_info"] = PharmacyInfo(
            pharmacy_id=listing.pharmacy_id,
            pharmacy_name=listing.pharmacy.name,
            price=listing.price,
            stock=listing.stock,
            discount=listing.discount,
            is_available=listing.is_available,
        )
        return cls(**data)


class MedicineListResponse(BaseModel):
    medicines: List[MedicineWithPharmacy]
    current_page: int
    total_pages: int
    total_medicines: int


class MedicineSearchResponse(BaseModel):
    medicines: List[Medicine]
    current_page: int
    total_pages: int
    total_medicines: int


class MedicineDetail(BaseModel):
    medicine: Medicine
    reviews: List[Review]


class AlternativesResponse(BaseModel):
    alternatives: List[MedicineWithPharmacy]
    source: Literal["predefined", "activeIngredient", "none"]
