"""User preferences, and a store that persists them and notifies listeners."""

from __future__ import annotations

import dataclasses
import json
import logging
import os
import pathlib
import typing

import pandas as pd

logger = logging.getLogger(__name__)

DEFAULT_TIMEZONE = "America/New_York"

DATE_FORMATS = ("MM/DD/YYYY", "DD/MM/YYYY", "YYYY-MM-DD")

TRANSLATIONS = {
    "en": {
        "dashboard": "Dashboard",
        "classes": "My Classes",
        "grades": "Grade Tracker",
        "assignments": "Assignments",
        "settings": "Settings",
        "profile": "Profile",
    },
    "es": {
        "dashboard": "Panel de Control",
        "classes": "Mis Clases",
        "grades": "Seguimiento de Calificaciones",
        "assignments": "Tareas",
        "settings": "Configuración",
        "profile": "Perfil",
    },
    "fr": {
        "dashboard": "Tableau de Bord",
        "classes": "Mes Classes",
        "grades": "Suivi des Notes",
        "assignments": "Devoirs",
        "settings": "Paramètres",
        "profile": "Profil",
    },
    "de": {
        "dashboard": "Dashboard",
        "classes": "Meine Klassen",
        "grades": "Notenverfolgung",
        "assignments": "Aufgaben",
        "settings": "Einstellungen",
        "profile": "Profil",
    },
}


def _local_timezone() -> str:
    return os.environ.get("TZ") or DEFAULT_TIMEZONE


# UserSettings -------------------------------------------------------------------------


@dataclasses.dataclass
class NotificationSettings:
    assignments: bool = True
    grades: bool = True
    deadlines: bool = True
    email: bool = False


@dataclasses.dataclass
class PrivacySettings:
    share_grades: bool = False
    share_schedule: bool = False
    analytics: bool = True


@dataclasses.dataclass
class UserSettings:
    """A user's preferences.

    Instances are plain values; pass one explicitly to the functions that
    depend on it, such as :func:`courselib.prioritize_assignments`.

    Attributes
    ----------
    theme: str
        One of "light", "dark" or "system". Default: "system".
    language: str
        Language code used by :meth:`SettingsStore.localized_text`. Default: "en".
    timezone: str
        IANA time zone name used when formatting times. Default: the ``TZ``
        environment variable, or "America/New_York".
    date_format: str
        One of "MM/DD/YYYY", "DD/MM/YYYY" or "YYYY-MM-DD". Default: "MM/DD/YYYY".
    time_format: str
        Either "12h" or "24h". Default: "12h".
    smart_prioritization: bool
        If `True`, assignment lists are ordered by priority score. If `False`,
        they are left in the order given. Default: `True`.
    notifications: NotificationSettings
        Which notifications the user wants.
    privacy: PrivacySettings
        What the user is willing to share.

    """

    theme: str = "system"
    language: str = "en"
    timezone: str = dataclasses.field(default_factory=_local_timezone)
    date_format: str = "MM/DD/YYYY"
    time_format: str = "12h"
    smart_prioritization: bool = True
    notifications: NotificationSettings = dataclasses.field(
        default_factory=NotificationSettings
    )
    privacy: PrivacySettings = dataclasses.field(default_factory=PrivacySettings)

    def to_dict(self) -> dict:
        return dataclasses.asdict(self)

    @classmethod
    def from_dict(cls, dct: typing.Mapping) -> "UserSettings":
        """Create settings from a (possibly partial) dictionary.

        Missing keys take their default values, and unknown keys are ignored.

        """
        known = {f.name for f in dataclasses.fields(cls)}
        kwargs = {k: v for k, v in dct.items() if k in known}

        if "notifications" in kwargs:
            kwargs["notifications"] = NotificationSettings(**kwargs["notifications"])
        if "privacy" in kwargs:
            kwargs["privacy"] = PrivacySettings(**kwargs["privacy"])

        return cls(**kwargs)


# SettingsStore ========================================================================


class SettingsStore:
    """Holds the current settings, persists them, and notifies subscribers.

    This is meant for the layer that binds the library to a user interface. The
    computational functions never consult a store; read :meth:`get` and pass
    the result along instead.

    Parameters
    ----------
    path : Optional[Union[str, pathlib.Path]]
        A JSON file in which the settings are saved. If it exists, saved
        settings are loaded from it and merged over the defaults. If `None`,
        the settings are kept in memory only.

    """

    def __init__(self, path=None):
        self.path = pathlib.Path(path) if path is not None else None
        self._settings = UserSettings()
        self._listeners = []

        if self.path is not None:
            self._load()

    def __repr__(self):
        return f"{self.__class__.__name__}(path={self.path!r})"

    # persistence ----------------------------------------------------------------------

    def _load(self):
        if not self.path.exists():
            return

        try:
            saved = json.loads(self.path.read_text())
            self._settings = UserSettings.from_dict(saved)
        except (OSError, ValueError, TypeError) as exc:
            logger.warning("Failed to load settings from %s: %s", self.path, exc)

    def _save(self):
        if self.path is not None:
            try:
                self.path.write_text(json.dumps(self._settings.to_dict(), indent=2))
            except OSError as exc:
                logger.warning("Failed to save settings to %s: %s", self.path, exc)

        self._notify()

    # subscriptions --------------------------------------------------------------------

    def _notify(self):
        for listener in list(self._listeners):
            listener()

    def subscribe(self, listener: typing.Callable[[], None]) -> typing.Callable[[], None]:
        """Call `listener` whenever the settings change.

        Returns
        -------
        Callable[[], None]
            A function which, when called, unsubscribes the listener.

        """
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # reading and updating -------------------------------------------------------------

    def get(self) -> UserSettings:
        """A copy of the current settings."""
        return UserSettings.from_dict(self._settings.to_dict())

    def update(self, **changes):
        """Change top-level settings, then save and notify subscribers.

        Raises
        ------
        TypeError
            If a setting does not exist.

        """
        self._settings = dataclasses.replace(self._settings, **changes)
        self._save()

    def update_nested(self, key: str, **changes):
        """Change some of the settings in a nested group, such as ``notifications``.

        Raises
        ------
        ValueError
            If `key` does not name a nested group of settings.

        """
        group = getattr(self._settings, key, None)
        if not dataclasses.is_dataclass(group):
            raise ValueError(f'"{key}" is not a nested group of settings.')

        self._settings = dataclasses.replace(
            self._settings, **{key: dataclasses.replace(group, **changes)}
        )
        self._save()

    def reset(self):
        """Restore the default settings."""
        self._settings = UserSettings()
        self._save()

    # formatting -----------------------------------------------------------------------

    def format_date(self, date) -> str:
        """Format a date according to the ``date_format`` setting."""
        ts = pd.Timestamp(date)
        fmt = self._settings.date_format

        if fmt == "DD/MM/YYYY":
            return f"{ts.day:02d}/{ts.month:02d}/{ts.year}"
        elif fmt == "YYYY-MM-DD":
            return ts.strftime("%Y-%m-%d")
        else:
            return f"{ts.month}/{ts.day}/{ts.year}"

    def format_time(self, date) -> str:
        """Format a time of day according to the ``time_format`` setting.

        Time zone aware timestamps are first converted to the ``timezone``
        setting; naive timestamps are assumed to be local already.

        """
        ts = pd.Timestamp(date)
        if ts.tzinfo is not None:
            ts = ts.tz_convert(self._settings.timezone)

        if self._settings.time_format == "24h":
            return f"{ts.hour:02d}:{ts.minute:02d}"

        hour = ts.hour % 12 or 12
        suffix = "AM" if ts.hour < 12 else "PM"
        return f"{hour}:{ts.minute:02d} {suffix}"

    def format_datetime(self, date) -> str:
        return f"{self.format_date(date)} {self.format_time(date)}"

    def localized_text(self, key: str) -> str:
        """Translate a UI label, falling back to English and then to the key."""
        language = TRANSLATIONS.get(self._settings.language, {})
        return language.get(key) or TRANSLATIONS["en"].get(key) or key
