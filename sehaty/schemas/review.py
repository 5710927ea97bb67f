from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, Field


class ReviewCreate(BaseModel):
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = None
    images: List[str] = Field(default_factory=list)


class Review(ReviewCreate):
    id: int
    user_id: int
    target_type: str
    target_id: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
