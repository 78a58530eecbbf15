"""
Job Portal
Freelancers and companies register, complete role-specific profiles,
companies post jobs, freelancers apply, companies accept or reject.

Architecture:
- Relational store: accounts, profiles, postings, applications (raw SQL)
- FastAPI: REST API under /api
- jobportal.client: Python client mirroring the user's server state
"""

__version__ = "1.0.0"
