"""Disambiguate repeated service ids with letter suffixes."""

import logging
from collections import Counter
from dataclasses import replace
from typing import Dict, List, Sequence, Set

from models import ServiceRecord


def letter_suffix(n: int) -> str:
    """
    0 -> 'A', 25 -> 'Z', 26 -> 'AA', 27 -> 'AB', 701 -> 'ZZ', 702 -> 'AAA'.

    Spreadsheet-column style (bijective base 26), so suffixes never run out.
    """
    if n < 0:
        raise ValueError("suffix index must be >= 0")
    letters = ""
    n += 1
    while n:
        n, rem = divmod(n - 1, 26)
        letters = chr(ord("A") + rem) + letters
    return letters


class DuplicateResolver:
    """
    Make every service id unique.

    Ids seen more than once get A, B, C, ... in order of appearance; ids
    seen once are left alone. A generated id that would clash with an id
    already in the output (e.g. "X" repeated next to an existing "XA")
    skips to the next suffix.
    """

    def resolve(self, records: Sequence[ServiceRecord]) -> List[ServiceRecord]:
        """
        Args:
            records: Records in source order

        Returns:
            New list, same length and order, with unique ids
        """
        counts = Counter(r.id for r in records)
        taken: Set[str] = {sid for sid, c in counts.items() if c == 1}
        next_index: Dict[str, int] = {}
        resolved: List[ServiceRecord] = []

        for record in records:
            if counts[record.id] == 1:
                resolved.append(record)
                continue
            n = next_index.get(record.id, 0)
            new_id = record.id + letter_suffix(n)
            while new_id in taken:
                n += 1
                new_id = record.id + letter_suffix(n)
            next_index[record.id] = n + 1
            taken.add(new_id)
            resolved.append(replace(record, id=new_id))

        repeated = {sid: c for sid, c in counts.items() if c > 1}
        if repeated:
            logging.info(
                f"[duplicates] Suffixed {sum(repeated.values())} record(s) "
                f"across {len(repeated)} repeated id(s)"
            )
        return resolved
