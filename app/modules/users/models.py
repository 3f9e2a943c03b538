# Supabase tables: users, subscription_plans
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py
# Authentication is handled by Supabase Auth (auth.users table)

"""
Expected Supabase table structure:

subscription_plans:
- id: uuid (primary key)
- name: text (unique, not null) - e.g. free, pro
- token_limit: integer (not null) - daily LLM token allowance
- price_per_month: numeric (nullable)

users:
- id: uuid (primary key, references auth.users.id)
- email: text (not null) - synced from auth.users at record creation
- plan_id: uuid (foreign key to subscription_plans.id, not null)
- tokens_used_today: integer (not null, default: 0)
- last_usage_date: date (not null) - UTC day the counter belongs to
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

A users row is created lazily on the free plan the first time a verified
auth user is seen (signup without confirmation, email verification, or
sign-in with no row yet).
"""
