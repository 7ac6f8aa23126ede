"""
Licenses module - license tracking and cost reporting.

This module handles:
- License entity and its lifecycle (grant, revoke, return, suspend, resume, expire)
- Per-user and organization-wide license listings
- Monthly cost statistics
"""
