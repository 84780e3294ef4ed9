# cloudsvc/features/registry.py
"""
Feature capability registry.

A closed table of the features that can be enabled across roles. Each entry
says which role kind may consume the feature, which role kind may provide
it, how to recognise a provider and an already-enabled consumer, and the
ordered directives that enable it.

The table is fixed: add a feature by adding a FeatureId member and its
descriptor below.

Usage:
    from cloudsvc.features.registry import get_feature

    descriptor = get_feature("memcache")
    descriptor.consumer_kind  # RoleKind.WEB
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Tuple

from cloudsvc.features.directives import (
    AddDefinitionSetting,
    AddInternalEndpoint,
    AddLocalStore,
    AddRuntime,
    AddSettingValue,
    AddStartupTask,
    CopyScaffolding,
    Directive,
    InjectConfigSections,
)
from cloudsvc.model import Protocol, RoleKind

# =============================================================================
# Exceptions
# =============================================================================


class UnknownFeatureError(LookupError):
    """Raised for a feature identifier outside the registry. A programming error."""

    pass


# =============================================================================
# Descriptors
# =============================================================================


class FeatureId(str, Enum):
    MEMCACHE = "memcache"


@dataclass(frozen=True)
class FeatureDescriptor:
    """
    Static description of one enablable feature.

    Args:
        feature_id: Registry key
        display_name: Name used in caller-visible messages
        consumer_kind: Role kind the feature is enabled on
        provider_kind: Role kind hosting the capability
        provider_marker: Module a provider role must import
        consumer_marker: Definition-side setting present once enabled
        directives: Mutations applied to the consumer, in order
    """

    feature_id: FeatureId
    display_name: str
    consumer_kind: RoleKind
    provider_kind: RoleKind
    provider_marker: str
    consumer_marker: str
    directives: Tuple[Directive, ...]


CACHING_MODULE = "Caching"
CACHE_DIAGNOSTIC_LEVEL = "Microsoft.WindowsAzure.Plugins.Caching.ClientDiagnosticLevel"
MEMCACHE_ENDPOINT = "memcache_default"
MEMCACHE_PORT = 11211

MEMCACHE_CONFIG_SECTIONS = """\
<configSections>
  <section name="dataCacheClients" type="Microsoft.ApplicationServer.Caching.DataCacheClientsSection, Microsoft.ApplicationServer.Caching.Core" allowLocation="true" allowDefinition="Everywhere" />
</configSections>"""

MEMCACHE_CLIENTS = """\
<dataCacheClients>
  <dataCacheClient name="DefaultShimConfig" useLegacyProtocol="false">
    <autoDiscover isEnabled="true" identifier="{provider}" />
  </dataCacheClient>
</dataCacheClients>"""

MEMCACHE = FeatureDescriptor(
    feature_id=FeatureId.MEMCACHE,
    display_name="memcache",
    consumer_kind=RoleKind.WEB,
    provider_kind=RoleKind.WORKER,
    provider_marker=CACHING_MODULE,
    consumer_marker=CACHE_DIAGNOSTIC_LEVEL,
    directives=(
        AddStartupTask(command_line="setup_cache.cmd > cache_log.txt"),
        AddRuntime(runtime_id="cache"),
        CopyScaffolding(template="Cache/WebRole"),
        AddInternalEndpoint(name=MEMCACHE_ENDPOINT, protocol=Protocol.TCP, port=MEMCACHE_PORT),
        AddLocalStore(name="DiagnosticStore", size_in_mb=20000, clean_on_role_recycle=False),
        AddDefinitionSetting(name=CACHE_DIAGNOSTIC_LEVEL),
        AddSettingValue(name=CACHE_DIAGNOSTIC_LEVEL, value="1"),
        InjectConfigSections(sections=(MEMCACHE_CONFIG_SECTIONS, MEMCACHE_CLIENTS)),
    ),
)

FEATURES: Dict[FeatureId, FeatureDescriptor] = {
    FeatureId.MEMCACHE: MEMCACHE,
}


# =============================================================================
# Lookup
# =============================================================================


def get_feature(feature_id: FeatureId | str) -> FeatureDescriptor:
    """
    Get a feature descriptor.

    Raises:
        UnknownFeatureError: If the identifier isn't in the registry
    """
    try:
        return FEATURES[FeatureId(feature_id)]
    except (ValueError, KeyError):
        available = sorted(f.value for f in FEATURES)
        raise UnknownFeatureError(
            f"Unknown feature: {feature_id!r}. Available: {available}"
        ) from None


def list_features() -> List[str]:
    return sorted(f.value for f in FEATURES)
