"""
Catalog module - software products offered to users.

This module handles:
- Software entity and its billing cycle
- Catalog browsing decorated with the caller's license and request state
- Catalog administration
"""
