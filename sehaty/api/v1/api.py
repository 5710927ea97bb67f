from fastapi import APIRouter

from sehaty.api.v1.endpoints import catalog, medicines, pharmacies, prescriptions
from sehaty.reminders.api import router as reminders_router

api_router = APIRouter()
api_router.include_router(reminders_router, prefix="/reminders", tags=["reminders"])
api_router.include_router(medicines.router, prefix="/medicines", tags=["medicines"])
api_router.include_router(catalog.router, tags=["catalog"])
api_router.include_router(pharmacies.router, prefix="/pharmacies", tags=["pharmacies"])
api_router.include_router(prescriptions.router, prefix="/prescriptions", tags=["prescriptions"])
