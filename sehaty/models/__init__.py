from .user import User, UserRole
from .medicine import Category, ActiveIngredient, Medicine, medicine_alternatives
from .pharmacy import Pharmacy, PharmacyMedicine
from .review import Review
from .prescription import Prescription, PrescriptionStatus

# Reminder models live with the reminders module
from sehaty.reminders.models import Reminder, DailyStatus, ReminderStatus
