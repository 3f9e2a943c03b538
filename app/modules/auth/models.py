# Supabase Auth
# This module uses Supabase's built-in authentication system
# No custom tables are required - Supabase Auth handles:
# - User registration and email confirmation (auth.users table)
# - Password sign-in and session issuing
# - JWT access token validation

"""
Supabase Auth calls used here:
- auth.sign_up() - Register, sends the confirmation email
- auth.verify_otp() - Confirm a signup by token hash (email link) or emailed code
- auth.sign_in_with_password() - Issue access/refresh tokens
- auth.get_user() - Resolve a bearer access token to its user

The application-side profile (plan, daily usage) lives in the users table,
see app/modules/users/models.py.
"""
