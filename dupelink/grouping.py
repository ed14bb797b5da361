"""
Signature index: clusters file records by signature.

Distinct signatures live as separate keys of one map; records that share a
signature form an append-only chain under that key. Records are never removed
once stored, so chain positions stay stable for the hardlink report walk.
"""
from __future__ import annotations
from enum import Enum
from typing import Callable, Dict, Hashable, Iterator, List, NamedTuple, Optional

from .models import FileRecord

# Called with (candidate, chain member). True means the candidate was handled
# as a duplicate of that member and must not be stored.
AbsorbCallback = Callable[[FileRecord, FileRecord], bool]


class Outcome(str, Enum):
    STORED_AS_NEW = "stored_as_new"
    MERGED_AS_DUPLICATE = "merged_as_duplicate"
    MERGED_INTO_CHAIN = "merged_into_chain"


class Placement(NamedTuple):
    outcome: Outcome
    existing: Optional[FileRecord]


class SignatureIndex:
    def __init__(self) -> None:
        self._chains: Dict[Hashable, List[FileRecord]] = {}
        self._count = 0

    def __len__(self) -> int:
        return self._count

    def insert(
        self,
        record: FileRecord,
        absorb: Optional[AbsorbCallback] = None,
        chain_all: bool = False,
    ) -> Placement:
        """Place ``record`` in the index.

        With ``chain_all`` set (reference files, hardlink discovery) the record
        is appended to its chain without consulting ``absorb``, so every later
        candidate gets checked against it.
        """
        chain = self._chains.get(record.key)
        if chain is None:
            self._chains[record.key] = [record]
            self._count += 1
            return Placement(Outcome.STORED_AS_NEW, None)

        if not chain_all and absorb is not None:
            for existing in chain:
                if absorb(record, existing):
                    return Placement(Outcome.MERGED_AS_DUPLICATE, existing)

        chain.append(record)
        self._count += 1
        return Placement(Outcome.MERGED_INTO_CHAIN, chain[0])

    def chain_for(self, key: Hashable) -> List[FileRecord]:
        return list(self._chains.get(key, ()))

    def chains(self) -> Iterator[List[FileRecord]]:
        """Yield every chain, ordered by signature."""
        for key in sorted(self._chains):
            yield list(self._chains[key])

    def records(self) -> Iterator[FileRecord]:
        for chain in self.chains():
            yield from chain
