"""Incapacidades API - authentication and user management.

Registration, login, token refresh, and role-based access for the
medical leave ("incapacidades") tracking system.
"""

__version__ = "1.0.0"
