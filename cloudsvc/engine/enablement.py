# cloudsvc/engine/enablement.py
"""
Feature enablement engine.

Enables a registered feature on a consumer role, backed by a provider role,
keeping the definition document, every settings document and the consumer's
scaffold files consistent.

Protocol (each step is a hard gate, run strictly in this order):
    1. Load the project
    2. Locate the consumer role            -> RoleNotFoundError
    3. Locate the provider role            -> RoleNotFoundError
    4. Check the consumer's kind           -> UnsupportedRoleKindError
    5. Check the provider's kind + marker  -> NotAFeatureProviderError
    6. Check the feature isn't enabled     -> AlreadyEnabledError
    7. Apply the feature's directives in memory
    8. Persist                             -> PersistenceError
    9. Done

Nothing is written before step 8. Enabling is not idempotent: once a
consumer carries the feature, any further call fails at step 6, whichever
provider it names.

Usage:
    engine = EnablementEngine()
    engine.enable("/path/to/AzureService", "WebRole1", "WorkerRole1", "memcache")
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from cloudsvc.core.exceptions import (
    AlreadyEnabledError,
    DocumentMalformedError,
    NotAFeatureProviderError,
    UnsupportedRoleKindError,
    WrongRoleKindError,
)
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
from cloudsvc.features.registry import FeatureDescriptor, FeatureId, get_feature
from cloudsvc.features.web_config import inject_sections
from cloudsvc.logging.logger import get_logger
from cloudsvc.logging.tags import ENABLE, FEATURE
from cloudsvc.model import (
    InternalEndpoint,
    LocalStore,
    Project,
    Role,
    StartupTask,
)
from cloudsvc.roles.locator import expect_kind, find_role
from cloudsvc.scaffold.templates import stage_template
from cloudsvc.store import DocumentStore

logger = get_logger(__name__)


class EnablementEngine:
    """
    Runs the enablement protocol against projects on disk.

    Args:
        store: Document store used to load and persist projects
    """

    def __init__(self, store: Optional[DocumentStore] = None) -> None:
        self._store = store or DocumentStore()

    def enable(
        self,
        project_path: Path | str,
        consumer_role_name: str,
        provider_role_name: str,
        feature_id: FeatureId | str,
    ) -> None:
        """
        Enable a feature on a consumer role.

        Raises:
            DocumentNotFoundError, DocumentMalformedError: Project can't be loaded
            RoleNotFoundError: Consumer or provider role doesn't exist
            UnsupportedRoleKindError: Consumer is not the kind the feature needs
            NotAFeatureProviderError: Provider can't host the feature
            AlreadyEnabledError: Consumer already carries the feature
            PersistenceError: Project files couldn't be written
        """
        feature = get_feature(feature_id)
        logger.debug(
            f"{FEATURE} {feature.display_name}: {feature.consumer_kind.value} consumer, "
            f"{feature.provider_kind.value} provider importing {feature.provider_marker!r}"
        )

        logger.debug(f"{ENABLE} [1/8] Loading project at {project_path}")
        project = self._store.load(project_path)

        logger.debug(f"{ENABLE} [2/8] Locating consumer {consumer_role_name!r}")
        consumer = find_role(project, consumer_role_name)

        logger.debug(f"{ENABLE} [3/8] Locating provider {provider_role_name!r}")
        provider = find_role(project, provider_role_name)

        logger.debug(f"{ENABLE} [4/8] Checking consumer kind")
        self._check_consumer(consumer, feature)

        logger.debug(f"{ENABLE} [5/8] Checking provider kind and marker")
        self._check_provider(provider, feature)

        logger.debug(f"{ENABLE} [6/8] Checking {feature.display_name} isn't enabled yet")
        self._check_not_enabled(consumer, feature)

        logger.debug(f"{ENABLE} [7/8] Applying {len(feature.directives)} directive(s)")
        for directive in feature.directives:
            self._apply(project, consumer, provider.name, directive)

        logger.debug(f"{ENABLE} [8/8] Persisting project")
        self._store.save(project)

        logger.info(
            f"{ENABLE} Enabled {feature.display_name} on {consumer.name} "
            f"using {provider.name}"
        )

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    @staticmethod
    def _check_consumer(consumer: Role, feature: FeatureDescriptor) -> None:
        try:
            expect_kind(consumer, feature.consumer_kind)
        except WrongRoleKindError as e:
            raise UnsupportedRoleKindError(
                consumer.name, feature.display_name, consumer.kind.value
            ) from e

    @staticmethod
    def _check_provider(provider: Role, feature: FeatureDescriptor) -> None:
        try:
            expect_kind(provider, feature.provider_kind)
        except WrongRoleKindError as e:
            raise NotAFeatureProviderError(provider.name, feature.display_name) from e

        if not provider.has_import(feature.provider_marker):
            raise NotAFeatureProviderError(provider.name, feature.display_name)

    @staticmethod
    def _check_not_enabled(consumer: Role, feature: FeatureDescriptor) -> None:
        if consumer.has_definition_setting(feature.consumer_marker):
            raise AlreadyEnabledError(consumer.name, feature.display_name)

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def _apply(self, project: Project, consumer: Role, provider_name: str, directive: Directive) -> None:
        if isinstance(directive, AddStartupTask):
            consumer.add_startup_task(
                StartupTask(
                    command_line=directive.command_line,
                    execution_context=directive.execution_context,
                    task_type=directive.task_type,
                )
            )

        elif isinstance(directive, AddRuntime):
            consumer.add_runtime(directive.runtime_id)

        elif isinstance(directive, CopyScaffolding):
            staged = stage_template(self._store, project.scaffold(consumer.name), directive.template)
            logger.debug(f"{ENABLE} Staged {len(staged)} scaffold file(s) for {consumer.name}")

        elif isinstance(directive, AddInternalEndpoint):
            consumer.add_internal_endpoint(
                InternalEndpoint(name=directive.name, protocol=directive.protocol, port=directive.port)
            )

        elif isinstance(directive, AddLocalStore):
            consumer.add_local_store(
                LocalStore(
                    name=directive.name,
                    size_in_mb=directive.size_in_mb,
                    clean_on_role_recycle=directive.clean_on_role_recycle,
                )
            )

        elif isinstance(directive, AddDefinitionSetting):
            consumer.add_definition_setting(directive.name)

        elif isinstance(directive, AddSettingValue):
            for role_settings in project.role_settings(consumer.name):
                role_settings.set_setting(directive.name, directive.value)

        elif isinstance(directive, InjectConfigSections):
            self._inject(project, consumer, provider_name, directive)

        else:
            raise TypeError(f"Unsupported directive: {type(directive).__name__}")

    def _inject(
        self,
        project: Project,
        consumer: Role,
        provider_name: str,
        directive: InjectConfigSections,
    ) -> None:
        scaffold = project.scaffold(consumer.name)
        relative = directive.file or project.paths.web_config_name
        path = scaffold.target(relative)

        try:
            current = self._store.read_scaffold_text(scaffold, relative)
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentMalformedError(f"Failed to read config file: {e}", path=path) from e

        fragments = [section.format(provider=provider_name) for section in directive.sections]
        text, injected = inject_sections(current, fragments, path=path)

        if injected:
            scaffold.stage(relative, text)
            logger.debug(f"{ENABLE} Injected {', '.join(injected)} into {path}")


def enable_memcache(
    project_path: Path | str,
    role_name: str,
    cache_worker_role_name: str,
    store: Optional[DocumentStore] = None,
) -> None:
    """Enable memcache on a web role, backed by a cache worker role."""
    EnablementEngine(store).enable(project_path, role_name, cache_worker_role_name, FeatureId.MEMCACHE)
