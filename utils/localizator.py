import json
from pathlib import Path
from typing import Optional

import config
from enums.text_entity import TextEntity

L10N_DIR = Path(__file__).resolve().parent.parent / "l10n"


class Localizator:

    @staticmethod
    def get_text(entity: TextEntity, key: str, lang: Optional[str] = None) -> str:
        """
        Get localized text for given entity and key.

        Args:
            entity: Entity type (USER, COMMON)
            key: Localization key
            lang: Optional language code (e.g., "en").
                  If None, uses config.LANGUAGE (default).

        Returns:
            Localized text string

        Raises:
            KeyError: If the key is missing from the language file
        """
        language = lang if lang is not None else config.LANGUAGE
        localization_file = L10N_DIR / f"{language}.json"

        with open(localization_file, "r", encoding="UTF-8") as f:
            data = json.loads(f.read())
            return data[entity.value][key]

    @staticmethod
    def get_currency_symbol(lang: Optional[str] = None):
        return Localizator.get_text(TextEntity.COMMON, f"{config.CURRENCY.lower()}_symbol", lang=lang)

    @staticmethod
    def get_currency_text(lang: Optional[str] = None):
        return Localizator.get_text(TextEntity.COMMON, f"{config.CURRENCY.lower()}_text", lang=lang)
