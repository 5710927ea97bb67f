from sqlalchemy import Column, Integer, String, Float, DateTime, Boolean, Text, ForeignKey, Table, Index
from sqlalchemy.orm import relationship

from sehaty.db.base import Base
from sehaty.utils.timezone import utcnow


# Curated substitutes; rows are written by crud.medicine.set_alternatives
medicine_alternatives = Table(
    "medicine_alternatives",
    Base.metadata,
    Column("medicine_id", Integer, ForeignKey("medicines.id", ondelete="CASCADE"), primary_key=True),
    Column("alternative_id", Integer, ForeignKey("medicines.id", ondelete="CASCADE"), primary_key=True),
    Column("position", Integer, nullable=False, default=0),
)


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow)

    medicines = relationship("Medicine", back_populates="category")


class ActiveIngredient(Base):
    """Pharmacological compound used to match substitute medicines"""
    __tablename__ = "active_ingredients"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False, index=True)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow)

    medicines = relationship("Medicine", back_populates="active_ingredient")


class Medicine(Base):
    __tablename__ = "medicines"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    generic_name = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    concentration = Column(String, nullable=True)  # e.g. "500mg"
    manufacturer = Column(String, nullable=True)
    medicine_type = Column(String, nullable=True)  # tablet, syrup, capsule, ...
    image = Column(String, nullable=True)

    # Catalog pricing; live pricing comes from pharmacy listings
    price = Column(Float, default=0.0)
    discount = Column(Float, default=0.0)
    available_stock = Column(Integer, default=0)
    is_available = Column(Boolean, nullable=False, default=True)
    prescription_required = Column(Boolean, nullable=False, default=False)

    side_effects = Column(Text, nullable=True)
    usage_instruction = Column(Text, nullable=True)
    storage_condition = Column(Text, nullable=True)

    rating = Column(Float, nullable=False, default=0.0)
    total_reviews = Column(Integer, nullable=False, default=0)

    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    active_ingredient_id = Column(Integer, ForeignKey("active_ingredients.id"), nullable=True, index=True)

    is_deleted = Column(Boolean, nullable=False, default=False)
    deleted_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    # Relationships
    category = relationship("Category", back_populates="medicines")
    active_ingredient = relationship("ActiveIngredient", back_populates="medicines")
    alternatives = relationship(
        "Medicine",
        secondary=medicine_alternatives,
        primaryjoin=id == medicine_alternatives.c.medicine_id,
        secondaryjoin=id == medicine_alternatives.c.alternative_id,
        order_by=medicine_alternatives.c.position,
        viewonly=True,
    )
    listings = relationship("PharmacyMedicine", back_populates="medicine")

    __table_args__ = (
        Index("idx_medicines_ingredient_available", "active_ingredient_id", "is_available", "is_deleted"),
    )

    @property
    def alternative_ids(self):
        return [alt.id for alt in self.alternatives]
