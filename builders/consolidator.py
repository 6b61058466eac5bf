"""Group service records by destination address."""

import logging
from typing import Dict, List, Sequence

from models import ConsolidatedGroup, ServiceRecord


class Consolidator:
    """Build one group per distinct address, keeping first-seen order."""

    def consolidate(self, records: Sequence[ServiceRecord]) -> List[ConsolidatedGroup]:
        # dict keeps insertion order: groups follow first occurrence of each address
        by_address: Dict[str, List[str]] = {}
        for record in records:
            by_address.setdefault(record.address, []).append(record.id)

        groups = [
            ConsolidatedGroup(address=address, service_ids=ids)
            for address, ids in by_address.items()
        ]
        logging.info(f"[consolidate] {len(records)} record(s) -> {len(groups)} address(es)")
        return groups
