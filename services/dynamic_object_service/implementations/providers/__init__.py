"""Vendor request builders, one per supported CRM."""

from services.dynamic_object_service.implementations.providers.close_provider_impl import (
    CloseProviderImpl,
)
from services.dynamic_object_service.implementations.providers.hubspot_provider_impl import (
    HubSpotProviderImpl,
)
from services.dynamic_object_service.implementations.providers.ms_dynamics_provider_impl import (
    MSDynamicsProviderImpl,
)
from services.dynamic_object_service.implementations.providers.pipedrive_provider_impl import (
    PipedriveProviderImpl,
)
from services.dynamic_object_service.implementations.providers.salesforce_provider_impl import (
    SalesforceProviderImpl,
)
from services.dynamic_object_service.implementations.providers.zoho_provider_impl import (
    ZohoProviderImpl,
)

__all__ = [
    "CloseProviderImpl",
    "HubSpotProviderImpl",
    "MSDynamicsProviderImpl",
    "PipedriveProviderImpl",
    "SalesforceProviderImpl",
    "ZohoProviderImpl",
]
