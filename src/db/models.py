"""Database table name constants and type references."""

# Table names used in Supabase queries
USERS = "users"
ROOMS = "rooms"
MEMBERSHIPS = "memberships"
MESSAGES = "messages"
REFRESH_TOKENS = "refresh_tokens"

# Membership roles
ROLE_ADMIN = "admin"
ROLE_MEMBER = "member"
VALID_ROLES = {ROLE_ADMIN, ROLE_MEMBER}
