"""
auth — User accounts and authentication.

Provides:
  • HS256 bearer token issue & verification
  • Password hashing (bcrypt)
  • Register / Login / Delete user API routes
  • ``get_current_user_id`` FastAPI dependency (the auth gate)
"""
