from .user import TokenPayload
from .medicine import (
    Category, CategoryCreate,
    ActiveIngredient, ActiveIngredientCreate,
    Medicine, MedicineCreate, MedicineUpdate,
    PharmacyInfo, MedicineWithPharmacy, MedicineListResponse, MedicineSearchResponse,
    MedicineDetail, AlternativesResponse, ALLOWED_MEDICINE_UPDATES,
)
from .pharmacy import Pharmacy, PharmacyCreate, PharmacyMedicine, PharmacyMedicineUpsert
from .review import Review, ReviewCreate
from .prescription import (
    Prescription, PrescriptionMedicine, PrescriptionUploadResponse,
    PrescriptionListResponse, PrescriptionDetail, PrescriptionStatusUpdate,
)
