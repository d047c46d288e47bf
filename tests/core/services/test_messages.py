"""Tests for localized reminder messages."""

from src.core.services import MessageCatalog, supported_locales


def test_supported_locales():
    assert supported_locales() == ["en", "fr"]


def test_english_is_default():
    catalog = MessageCatalog()
    assert catalog.locale == "en"
    assert catalog.t("eventReminder") == "Event Reminder"


def test_formats_title_into_body():
    body = MessageCatalog("en").t("taskReminderMessage", title="Water plants")
    assert body == 'Your task "Water plants" is due soon.'


def test_french_messages():
    catalog = MessageCatalog("fr")
    assert catalog.t("taskReminderTitle") == "Rappel de Tâche"
    assert "Réunion" in catalog.t("eventReminderMessage", title="Réunion")


def test_region_tag_falls_back_to_language():
    assert MessageCatalog("fr-CA").locale == "fr"
    assert MessageCatalog("fr_BE").locale == "fr"


def test_unknown_locale_falls_back_to_english():
    catalog = MessageCatalog("de")
    assert catalog.locale == "en"
    assert catalog.t("appointmentReminder") == "Appointment Reminder"


def test_unknown_key_returns_key():
    assert MessageCatalog().t("noSuchKey") == "noSuchKey"
