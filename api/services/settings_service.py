from pydantic import ValidationError

from api.schemas.settings_schemas import SettingsUpdate, UserSettings
from api.services.persistence import SETTINGS_KEY, PersistenceAdapter
from api.utils.logger import configure_logging

logger = configure_logging()


class SettingsStore:
    """Display preferences; last write wins, persisted on every update."""

    def __init__(self, persistence: PersistenceAdapter):
        self.persistence = persistence
        self._settings = UserSettings()

    def load(self) -> UserSettings:
        saved = self.persistence.load_or_default(SETTINGS_KEY)
        if not isinstance(saved, dict):
            self._settings = UserSettings()
            return self._settings
        merged = {**UserSettings().to_json_dict(), **saved}
        try:
            self._settings = UserSettings.model_validate(merged)
        except ValidationError as e:
            logger.warning("invalid saved settings, using defaults: %s", e.errors())
            self._settings = UserSettings()
        return self._settings

    def get(self) -> UserSettings:
        return self._settings

    def update(self, partial: SettingsUpdate | dict) -> UserSettings:
        """Merge ``partial`` over the current settings. Raises ValidationError on bad values."""
        if isinstance(partial, dict):
            partial = SettingsUpdate.model_validate(partial)
        changes = partial.model_dump(exclude_none=True)
        self._settings = self._settings.model_copy(update=changes)
        self.persistence.save(SETTINGS_KEY, self._settings.to_json_dict())
        logger.info("settings updated fields=%s", sorted(changes))
        return self._settings

    def reset(self) -> UserSettings:
        self.persistence.remove(SETTINGS_KEY)
        self._settings = UserSettings()
        return self._settings
