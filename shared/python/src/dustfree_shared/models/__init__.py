"""
dustfree_shared.models — Pydantic models matching each database table.

The API services build a model for every row they insert, so ids, enums
and money columns are validated before anything reaches Supabase;
``to_insert_dict()`` gives the JSON-ready row.
"""

from dustfree_shared.models.cleaner import Cleaner
from dustfree_shared.models.cleaning import Cleaning, CleaningMedia
from dustfree_shared.models.payout import CleanerPayout
from dustfree_shared.models.profile import Profile
from dustfree_shared.models.property import Property, PropertyTask, property_label

__all__ = [
    "Profile",
    "Property",
    "PropertyTask",
    "property_label",
    "Cleaner",
    "Cleaning",
    "CleaningMedia",
    "CleanerPayout",
]
