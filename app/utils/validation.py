import re
from typing import Iterable, List, Optional

_HTML_TAG = re.compile(r"<[^>]*>")
_JAVASCRIPT_SCHEME = re.compile(r"javascript:", re.IGNORECASE)


class ValidationHelpers:
    @staticmethod
    def normalize_name(name: str) -> str:
        """Trim surrounding whitespace from an item or household name"""
        return name.strip()

    @staticmethod
    def name_key(name: str) -> str:
        """Key used for case-insensitive name comparisons"""
        return name.strip().lower()

    @staticmethod
    def normalize_email(email: str) -> str:
        return email.strip().lower()

    @staticmethod
    def find_duplicate_names(
        names: Iterable[str], existing: Iterable[str]
    ) -> List[str]:
        """
        Return the names that collide, ignoring case, with an existing name
        or with an earlier name in the same batch. Order follows `names`.
        """
        seen = {ValidationHelpers.name_key(n) for n in existing}
        duplicates = []
        for name in names:
            key = ValidationHelpers.name_key(name)
            if key in seen:
                duplicates.append(name)
            seen.add(key)
        return duplicates

    @staticmethod
    def sanitize_prompt_text(content: Optional[str]) -> Optional[str]:
        """Strip HTML tags and javascript: schemes from text sent to the LLM"""
        if content is None:
            return None
        return _JAVASCRIPT_SCHEME.sub("", _HTML_TAG.sub("", content))
