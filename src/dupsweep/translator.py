from typing import Dict, Tuple
from dupsweep.translations.en import translations as en_translations
from dupsweep.translations.ru import translations as ru_translations

TRANSLATIONS: Dict[str, Dict] = {
    "en": en_translations,
    "ru": ru_translations,
}

LANGUAGES = list(TRANSLATIONS.keys())


class DictTranslator:
    def __init__(self, lang_code: str = "en"):
        self.lang_code = lang_code if lang_code in TRANSLATIONS else "en"
        self.translations = TRANSLATIONS[self.lang_code]

    def tr(self, key: str, **kwargs) -> str:
        text = self.translations.get(key, en_translations.get(key, key))
        return text.format(**kwargs) if kwargs else text

    @property
    def affirmative_answers(self) -> Tuple[str, ...]:
        return self.translations["affirmative_answers"]

    def is_affirmative(self, answer: str) -> bool:
        """Case-insensitive yes/y in the current language; anything else is a no."""
        return answer.strip().casefold() in self.affirmative_answers
