import random
import unittest

from backend.schemas import Participant
from backend.services.sit_out_service import playable_count, select_sit_outs


def make_pool(n: int, counts: dict[str, int] | None = None) -> list[Participant]:
    counts = counts or {}
    return [Participant(id=f"p{i}", name=f"Player {i}", sit_out_count=counts.get(f"p{i}", 0)) for i in range(n)]


class SitOutServiceTests(unittest.TestCase):
    def test_playable_count(self):
        self.assertEqual(playable_count(0), 0)
        self.assertEqual(playable_count(3), 0)
        self.assertEqual(playable_count(5), 4)
        self.assertEqual(playable_count(11), 8)
        self.assertEqual(playable_count(16), 16)
        self.assertEqual(playable_count(23), 16)

    def test_partition_covers_pool_for_all_sizes(self):
        rng = random.Random(7)
        for n in range(0, 24):
            pool = make_pool(n)
            sitting, playing = select_sit_outs(pool, rng=rng)
            sit_ids = {p.id for p in sitting}
            play_ids = {p.id for p in playing}

            self.assertEqual(len(playing), playable_count(n))
            self.assertEqual(len(sitting), n - playable_count(n))
            self.assertFalse(sit_ids & play_ids)
            self.assertEqual(sit_ids | play_ids, {p.id for p in pool})

    def test_nobody_sits_out_when_pool_fits(self):
        sitting, playing = select_sit_outs(make_pool(8), rng=random.Random(1))
        self.assertEqual(sitting, [])
        self.assertEqual(len(playing), 8)

    def test_small_pool_sits_out_entirely(self):
        sitting, playing = select_sit_outs(make_pool(3), rng=random.Random(1))
        self.assertEqual(len(sitting), 3)
        self.assertEqual(playing, [])

    def test_lowest_count_sits_out_first(self):
        pool = make_pool(6, counts={"p0": 2, "p1": 2, "p2": 1, "p3": 0, "p4": 2, "p5": 2})
        for seed in range(20):
            sitting, _ = select_sit_outs(pool, rng=random.Random(seed))
            self.assertEqual({p.id for p in sitting}, {"p3", "p2"})

    def test_avoids_consecutive_sit_out_when_alternative_exists(self):
        pool = make_pool(5)
        for seed in range(30):
            sitting, _ = select_sit_outs(pool, sat_out_last_round={"p0"}, rng=random.Random(seed))
            self.assertEqual(len(sitting), 1)
            self.assertNotEqual(sitting[0].id, "p0")

    def test_min_group_taken_before_last_round_sitters(self):
        # Only p1 has the lowest count; p2 and p3 sat out last round.
        pool = make_pool(7, counts={"p0": 3, "p1": 0, "p2": 2, "p3": 2, "p4": 1, "p5": 3, "p6": 3})
        sitting, playing = select_sit_outs(pool, sat_out_last_round={"p2", "p3"}, rng=random.Random(3))

        self.assertEqual(len(sitting), 3)
        self.assertEqual(sitting[0].id, "p1")
        self.assertEqual({p.id for p in sitting[1:]}, {"p2", "p3"})
        self.assertEqual(len(playing), 4)

    def test_backfills_by_ascending_count(self):
        pool = make_pool(7, counts={"p0": 0, "p1": 1, "p2": 5, "p3": 5, "p4": 5, "p5": 5, "p6": 5})
        sitting, _ = select_sit_outs(pool, rng=random.Random(11))

        ids = [p.id for p in sitting]
        self.assertEqual(ids[:2], ["p0", "p1"])
        self.assertEqual(len(ids), 3)

    def test_does_not_modify_counts(self):
        pool = make_pool(5)
        sitting, _ = select_sit_outs(pool, rng=random.Random(2))
        self.assertEqual(sitting[0].sit_out_count, 0)


if __name__ == "__main__":
    unittest.main()
