"""
Access requests module - request, approval and license grant.

This module handles:
- AccessRequest and Approval entities
- The approval workflow (manual, automatic, rejection, cancellation)
- The manager review queue
"""
