"""
crm_common_core.config_enums - Enums related to service configuration.
"""

from __future__ import annotations

from enum import Enum


class Environment(str, Enum):
    """Defines application environments."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class CRMProviderType(str, Enum):
    """Third-party CRM identifiers stored on a tenant connection."""

    HUBSPOT = "hubspot"
    ZOHO = "zohocrm"
    SALESFORCE = "sfdc"
    PIPEDRIVE = "pipedrive"
    CLOSE = "closecrm"
    MS_DYNAMICS_365_SALES = "ms_dynamics_365_sales"
