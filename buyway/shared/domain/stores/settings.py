from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Union

from buyway.shared.core.broadcaster import Broadcaster, Listener, Unsubscribe
from buyway.shared.domain.models import AppSettings, SettingsPatch

logger = logging.getLogger(__name__)


class SettingsStore:
    """The single global settings record. Starts from defaults, not persisted."""

    name = "settings"

    def __init__(self, defaults: Optional[AppSettings] = None) -> None:
        self._settings = (defaults or AppSettings()).model_copy(deep=True)
        self._broadcaster: Broadcaster[AppSettings] = Broadcaster(self.name)

    def get_settings(self) -> AppSettings:
        return self._settings.model_copy(deep=True)

    def subscribe(self, listener: Listener[AppSettings]) -> Unsubscribe:
        return self._broadcaster.subscribe(listener, self.get_settings())

    @property
    def subscriber_count(self) -> int:
        return self._broadcaster.subscriber_count

    def update_settings(self, patch: Union[SettingsPatch, Mapping[str, Any]]) -> None:
        """Shallow-merge the patch and notify synchronously."""
        changes = SettingsPatch.coerce(patch).changes()
        self._settings = self._settings.model_copy(update=changes)
        if "maintenance_mode" in changes:
            state = "enabled" if self._settings.maintenance_mode else "disabled"
            logger.info(f"Maintenance mode {state}")
        self._broadcaster.notify(self.get_settings)

    def is_maintenance_mode(self) -> bool:
        """Screens render a blocking notice and disable navigation when True."""
        return self._settings.maintenance_mode

    def resolve_logo(self, default_logo: str) -> str:
        """Configured logo URL, or the bundled asset when none is set."""
        return self._settings.app_logo or default_logo
