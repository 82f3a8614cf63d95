# Supabase table: chat_rooms
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure (columns used by this service):

chat_rooms:
- id: uuid (primary key)
- name: text (not null)
- is_group_chat: boolean (not null, default: false)
- is_buddy_chat: boolean (nullable, default: false)
- accountability_pairing_id: uuid (nullable, references accountability_buddies.id)
- group_id: uuid (nullable, references groups.id)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

At most one row with is_buddy_chat = true exists per accountability_pairing_id.
"""

CHAT_ROOMS_TABLE = "chat_rooms"
DEFAULT_BUDDY_ROOM_NAME = "Accountability Buddies"
