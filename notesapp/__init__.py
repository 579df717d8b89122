"""
Multi-Tenant Notes Service

Note-taking API where every request is authenticated and scoped to the
caller's tenant, with role checks and subscription-tier quotas.
"""

__version__ = "1.0.0"
