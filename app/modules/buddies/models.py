# Supabase table: accountability_buddies
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

accountability_buddies:
- id: uuid (primary key, default: gen_random_uuid())
- group_id: uuid (foreign key to groups.id, not null)
- user_id_1: uuid (not null) - first member
- user_id_2: uuid (not null) - second member
- user_id_3: uuid (nullable) - third member, only set for the triplet of an odd-sized group
- week_start: date (not null) - Monday of the week the pairing applies to
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now())

Rows for one (group_id, week_start) partition the group's members. Rows are
never updated in place; regeneration deletes every row for the key and
inserts a fresh set.
"""

PAIRINGS_TABLE = "accountability_buddies"
MEMBER_COLUMNS = ("user_id_1", "user_id_2", "user_id_3")
