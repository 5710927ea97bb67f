"""
Sehaty Backend Application Package

Pharmacy catalog, prescriptions and medication reminders behind a REST API.
"""
