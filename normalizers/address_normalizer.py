"""Address cleanup: strip building/condominium prefixes from delivery addresses."""

from typing import List, Optional, Pattern, Tuple

from config import ADDRESS_PREFIX_RULES


class AddressNormalizer:
    """
    Remove non-essential prefixes such as "Condomínio Alfa - " or
    "Edifício Beta - " from the start of an address.

    Rules are tried in table order, each removing at most one match per
    pass. Passes repeat until no rule fires, so stacked prefixes
    ("Condominio A - Edificio B - Rua X") are fully removed and
    normalizing twice gives the same result as normalizing once.
    """

    def __init__(self, rules: Optional[List[Tuple[Pattern[str], str]]] = None):
        """
        Args:
            rules: Ordered (pattern, replacement) table; defaults to
                config.ADDRESS_PREFIX_RULES
        """
        self.rules = list(ADDRESS_PREFIX_RULES if rules is None else rules)

    def _apply_rules_once(self, text: str) -> Tuple[str, bool]:
        changed = False
        for pattern, replacement in self.rules:
            new_text, n = pattern.subn(replacement, text, count=1)
            if n:
                text = new_text.strip()
                changed = True
        return text, changed

    def normalize(self, raw: Optional[str]) -> str:
        """
        Args:
            raw: Address as found in (or assembled from) the source sheet

        Returns:
            Trimmed address without recognized prefixes
        """
        text = (raw or "").strip()
        changed = True
        while changed and text:
            text, changed = self._apply_rules_once(text)
        return text
