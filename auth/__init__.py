"""
auth — User authentication module.

Provides:
  • Signed bearer token creation & verification
  • Password hashing (bcrypt, work factor 12)
  • Credential store over the async SQLAlchemy session
  • Signup / login / verify API routes
  • ``get_current_user`` FastAPI dependency
"""
