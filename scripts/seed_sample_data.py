#!/usr/bin/env python3
"""
Load a small sample catalog: categories, active ingredients, medicines with
curated alternatives, one pharmacy and its listings.

Usage:
    python scripts/seed_sample_data.py
"""

import logging

from sehaty import crud, schemas
from sehaty.core.database_utils import get_db_session
from sehaty.models.user import UserRole

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

OWNER_EMAIL = "pharmacy@sehaty.local"

# name, ingredient, category, price, prescription_required
SAMPLE_MEDICINES = [
    ("Panadol 500mg", "Paracetamol", "Pain Relief", 25.0, False),
    ("Adol 500mg", "Paracetamol", "Pain Relief", 20.0, False),
    ("Brufen 400mg", "Ibuprofen", "Pain Relief", 35.0, False),
    ("Augmentin 1g", "Amoxicillin/Clavulanate", "Antibiotics", 120.0, True),
]


def _get_or_create_named(db, crud_obj, schema, name):
    for item in crud_obj.get_multi(db, limit=1000):
        if item.name == name:
            return item
    return crud_obj.create(db, obj_in=schema(name=name))


def seed():
    with get_db_session() as db:
        owner = crud.user.get_by_email(db, email=OWNER_EMAIL)
        if not owner:
            owner = crud.user.create(
                db, email=OWNER_EMAIL, full_name="Sample Pharmacy Owner", role=UserRole.PHARMACY_OWNER
            )

        pharmacy = crud.pharmacy.create_with_owner(
            db, obj_in=schemas.PharmacyCreate(name="Sehaty Sample Pharmacy", address="Cairo"), owner_id=owner.id
        )

        by_name = {}
        for name, ingredient_name, category_name, price, rx in SAMPLE_MEDICINES:
            category = _get_or_create_named(db, crud.category, schemas.CategoryCreate, category_name)
            ingredient = _get_or_create_named(db, crud.active_ingredient, schemas.ActiveIngredientCreate, ingredient_name)
            medicine = crud.medicine.create_with_alternatives(
                db,
                obj_in=schemas.MedicineCreate(
                    name=name,
                    price=price,
                    prescription_required=rx,
                    category_id=category.id,
                    active_ingredient_id=ingredient.id,
                ),
            )
            crud.pharmacy_medicine.upsert(
                db,
                pharmacy_id=pharmacy.id,
                obj_in=schemas.PharmacyMedicineUpsert(medicine_id=medicine.id, price=price, stock=50),
            )
            by_name[name] = medicine
            logger.info(f"Seeded medicine {medicine.id}: {name}")

        crud.medicine.set_alternatives(
            db, medicine=by_name["Panadol 500mg"], alternative_ids=[by_name["Brufen 400mg"].id]
        )
        logger.info(f"Sample catalog loaded into pharmacy {pharmacy.id}")


if __name__ == "__main__":
    seed()
