"""Localized reminder titles and bodies."""

from src.config import get_logger

logger = get_logger(__name__)

DEFAULT_LOCALE = "en"

_CATALOGS: dict[str, dict[str, str]] = {
    "en": {
        "taskReminderTitle": "Task Reminder",
        "taskReminderMessage": 'Your task "{title}" is due soon.',
        "eventReminder": "Event Reminder",
        "eventReminderMessage": 'The event "{title}" is about to start.',
        "appointmentReminder": "Appointment Reminder",
        "appointmentReminderMessage": 'You have an appointment coming up: "{title}".',
    },
    "fr": {
        "taskReminderTitle": "Rappel de Tâche",
        "taskReminderMessage": 'Votre tâche "{title}" arrive à échéance.',
        "eventReminder": "Rappel d'événement",
        "eventReminderMessage": "L'événement \"{title}\" va bientôt commencer.",
        "appointmentReminder": "Rappel de rendez-vous",
        "appointmentReminderMessage": 'Vous avez un rendez-vous prochainement : "{title}".',
    },
}


def supported_locales() -> list[str]:
    return sorted(_CATALOGS)


class MessageCatalog:
    """
    Resolves message keys for one locale.

    Region tags fall back to their language ("fr-CA" -> "fr"), unknown
    languages and missing keys fall back to English.
    """

    def __init__(self, locale: str = DEFAULT_LOCALE):
        language = locale.replace("_", "-").split("-")[0].lower()
        if language not in _CATALOGS:
            logger.debug("locale_fallback", requested=locale, used=DEFAULT_LOCALE)
            language = DEFAULT_LOCALE
        self.locale = language
        self._messages = _CATALOGS[language]

    def t(self, key: str, **params: str) -> str:
        template = self._messages.get(key) or _CATALOGS[DEFAULT_LOCALE].get(key)
        if template is None:
            return key
        return template.format(**params) if params else template
