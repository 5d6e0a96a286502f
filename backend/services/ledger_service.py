from itertools import combinations
from typing import Iterable

from backend.config import RECENT_ROUNDS_LIMIT
from backend.schemas import Partnership


def pair_key(a: str, b: str) -> tuple[str, str]:
    return (a, b) if a <= b else (b, a)


class PartnershipLedger:
    """
    How often and how recently every pair of players shared a court.

    Instances are treated as values: record_station() and without()
    return a new ledger and leave the receiver untouched.
    """

    def __init__(self, entries: Iterable[Partnership] | None = None):
        self._entries: dict[tuple[str, str], Partnership] = {}
        for e in entries or []:
            key = pair_key(e.player1_id, e.player2_id)
            self._entries[key] = Partnership(
                player1_id=key[0],
                player2_id=key[1],
                times_played=e.times_played,
                recent_rounds=list(e.recent_rounds)[-RECENT_ROUNDS_LIMIT:],
            )

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, a: str, b: str) -> Partnership | None:
        return self._entries.get(pair_key(a, b))

    def count_together(self, a: str, b: str) -> int:
        e = self.get(a, b)
        return e.times_played if e else 0

    def recent_rounds(self, a: str, b: str) -> list[str]:
        e = self.get(a, b)
        return list(e.recent_rounds) if e else []

    def record_station(self, participant_ids: Iterable[str], round_id: str) -> "PartnershipLedger":
        ids = list(dict.fromkeys(participant_ids))
        out = self.copy()
        for a, b in combinations(ids, 2):
            key = pair_key(a, b)
            cur = out._entries.get(key)
            if cur is None:
                out._entries[key] = Partnership(
                    player1_id=key[0],
                    player2_id=key[1],
                    times_played=1,
                    recent_rounds=[round_id],
                )
            else:
                out._entries[key] = Partnership(
                    player1_id=key[0],
                    player2_id=key[1],
                    times_played=cur.times_played + 1,
                    recent_rounds=(cur.recent_rounds + [round_id])[-RECENT_ROUNDS_LIMIT:],
                )
        return out

    def without(self, participant_id: str) -> "PartnershipLedger":
        out = PartnershipLedger()
        out._entries = {k: v for k, v in self._entries.items() if participant_id not in k}
        return out

    def copy(self) -> "PartnershipLedger":
        out = PartnershipLedger()
        out._entries = dict(self._entries)
        return out

    def to_partnerships(self) -> list[Partnership]:
        return [self._entries[k] for k in sorted(self._entries)]
