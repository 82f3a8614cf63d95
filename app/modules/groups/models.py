# Supabase tables: groups, group_members, group_coaches (read-only here)
# This file documents the expected database schema
# Group management itself lives in the coaching web app; this service only reads

"""
Expected Supabase table structure:

groups:
- id: uuid (primary key)
- name: text (not null)
- description: text (nullable)
- created_by: uuid (foreign key to users.id, not null)
- created_at: timestamp (default: now())

group_members:
- id: uuid (primary key)
- group_id: uuid (foreign key to groups.id, not null)
- user_id: uuid (foreign key to users.id, not null)
- created_at: timestamp (default: now())

group_coaches:
- id: uuid (primary key)
- group_id: uuid (foreign key to groups.id, not null)
- coach_id: uuid (foreign key to users.id, not null)
- created_at: timestamp (default: now())
"""
