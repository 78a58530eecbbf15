"""
Services - logic shared by the route handlers.

- profile_service: accounts and profile reconciliation
- application_service: application lifecycle and job deletion
"""
