"""
Organizations module - tenants and accounts.

This module handles:
- Organization and User entities
- Registration, login and token refresh
- User administration and manager hierarchy
"""
