# Supabase table: client_profiles (read-only here)
# This file documents the expected database schema

"""
Expected Supabase table structure (columns used by this service):

client_profiles:
- id: uuid (primary key, same as auth user id)
- first_name: text (nullable)
- last_name: text (nullable)
- avatar_url: text (nullable)
"""
