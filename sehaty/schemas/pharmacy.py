from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field


class PharmacyCreate(BaseModel):
    name: str
    address: Optional[str] = None
    phone: Optional[str] = None


class Pharmacy(PharmacyCreate):
    id: int
    owner_id: Optional[int] = None
    is_active: bool = True
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PharmacyMedicineUpsert(BaseModel):
    """Create or replace the listing of one medicine at a pharmacy"""
    medicine_id: int
    price: float = Field(..., ge=0)
    stock: int = Field(0, ge=0)
    discount: float = Field(0.0, ge=0)
    is_available: bool = True


class PharmacyMedicine(PharmacyMedicineUpsert):
    id: int
    pharmacy_id: int
    is_deleted: bool = False
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
