"""Supported languages and the source/target pair."""

from enum import Enum

import attrs


class Language(Enum):
    """Fixed set of languages offered by the visualizer."""

    ENGLISH = "en"
    HINDI = "hi"
    MARATHI = "mr"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @classmethod
    def from_code(cls, code: "str | Language") -> "Language":
        """Resolve a language code (``"en"``) or display name (``"English"``)."""
        if isinstance(code, Language):
            return code
        if not isinstance(code, str):
            raise ValueError(f"Language code must be a string, got {type(code).__name__}")
        needle = code.strip().lower()
        for language in cls:
            if needle in (language.value, language.display_name.lower()):
                return language
        supported = ", ".join(language.value for language in cls)
        raise ValueError(f"Unsupported language '{code}' (supported: {supported})")


_DISPLAY_NAMES = {
    Language.ENGLISH: "English",
    Language.HINDI: "Hindi",
    Language.MARATHI: "Marathi",
}


@attrs.frozen
class LanguagePair:
    """Source and target language of a run. ``source == target`` is allowed."""

    source: Language = Language.ENGLISH
    target: Language = Language.HINDI

    def swapped(self) -> "LanguagePair":
        return LanguagePair(source=self.target, target=self.source)

    def to_dict(self) -> dict:
        return {
            "source": self.source.value,
            "source_name": self.source.display_name,
            "target": self.target.value,
            "target_name": self.target.display_name,
        }
