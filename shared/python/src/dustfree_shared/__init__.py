"""
dustfree_shared — shared utilities, models, and configuration for Dustfree.

Usage:
    from dustfree_shared.config import settings
    from dustfree_shared.db import get_supabase_client
    from dustfree_shared.models import Cleaning, CleanerPayout
    from dustfree_shared.time_utils import parse_timestamp, date_presets
    from dustfree_shared.constants import COLOR_PALETTE, HOME_PATHS
"""

__version__ = "0.1.0"
