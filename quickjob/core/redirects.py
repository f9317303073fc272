"""
Role-based landing pages.

After sign-in the frontend reads the user's role and lands on the matching
dashboard; unknown or missing roles go to the generic dashboard.
"""
from typing import Optional

DEFAULT_DASHBOARD = "/dashboard"

DASHBOARD_BY_ROLE = {
    "candidate": "/dashboard/candidat",
    "recruiter": "/dashboard/recruteur",
    "admin": "/dashboard/admin",
}


def dashboard_path_for_role(role: Optional[str]) -> str:
    return DASHBOARD_BY_ROLE.get(role or "", DEFAULT_DASHBOARD)
