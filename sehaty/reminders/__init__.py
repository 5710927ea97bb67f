"""Medication reminders.

A reminder series is stored as one record per calendar day; each record tracks
whether the dose was taken through per-date status entries.
"""
