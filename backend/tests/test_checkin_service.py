import json
import unittest
from datetime import datetime, timedelta
from unittest.mock import MagicMock

from factories import START, TUNING, consecutive, make_check_in

from lifescore.errors import CheckInValidationError, PersistenceError
from lifescore.services.checkin_service import (
    CheckInService,
    create_new_player,
    process_check_in,
    rebuild_player,
    refresh_player,
)
from lifescore.services.player_store import deserialize_player, serialize_player


def noop_save(player):
    pass


def run(player, check_in, today=None):
    return process_check_in(player, check_in, noop_save, today=today or check_in.date, tuning=TUNING)


class ProcessCheckInScenarioTests(unittest.TestCase):

    def setUp(self):
        self.player = create_new_player(datetime(2026, 3, 1), TUNING)

    def test_fresh_player_first_check_in(self):
        result = run(self.player, make_check_in(START, 7))

        self.assertEqual(result.player.current_streak, 1)
        self.assertEqual(result.player.longest_streak, 1)
        self.assertGreater(result.xp_gained, 0)
        crossed = result.xp_gained >= self.player.progress.xp_to_next_level
        self.assertEqual(result.leveled_up, crossed)
        self.assertEqual(result.score, 67)
        self.assertEqual(result.grade.grade, "C")
        self.assertEqual(result.player.total_days_logged, 1)
        self.assertEqual(result.player.last_log_date, START)

    def test_two_consecutive_perfect_days(self):
        first = run(self.player, make_check_in(START, 10))
        second = run(first.player, make_check_in(START + timedelta(days=1), 10))

        self.assertEqual(second.player.current_streak, 2)
        self.assertLessEqual(second.player.bars.fatigue, first.player.bars.fatigue)
        self.assertGreater(second.xp_gained, first.xp_gained)

    def test_low_day_after_five_day_gap(self):
        first = run(self.player, make_check_in(START, 7))
        later = run(first.player, make_check_in(START + timedelta(days=6), 2))

        self.assertGreater(later.player.bars.fatigue, first.player.bars.fatigue)
        self.assertEqual(later.player.current_streak, 1)
        self.assertEqual(later.player.longest_streak, 1)

    def test_resubmitting_today_overwrites(self):
        first = run(self.player, make_check_in(START, 7))
        second = run(first.player, make_check_in(START, 3, notes="rough day"))

        entries = [c for c in second.player.check_ins if c.date == START]
        self.assertEqual(len(entries), 1)
        self.assertEqual(entries[0].fitness, 3)
        self.assertEqual(entries[0].notes, "rough day")
        self.assertEqual(second.xp_gained, 0)
        self.assertEqual(second.player.total_days_logged, 1)


class ProcessCheckInPropertyTests(unittest.TestCase):

    def setUp(self):
        self.player = create_new_player(datetime(2026, 3, 1), TUNING)

    def test_identical_check_in_is_idempotent(self):
        check_in = make_check_in(START, 8)
        once = run(self.player, check_in)
        twice = run(once.player, check_in)

        self.assertEqual(twice.player, once.player)
        self.assertEqual(twice.xp_gained, 0)
        self.assertFalse(twice.leveled_up)

    def test_repeated_form_payload_is_idempotent(self):
        payload = {
            "date": START.isoformat(),
            "nutrition": 6, "fitness": 8, "work": 7,
            "social": 5, "safety": 9, "health": 7,
            "notes": "walked to work",
        }
        once = process_check_in(self.player, payload, noop_save, today=START, tuning=TUNING)
        twice = process_check_in(once.player, dict(payload), noop_save, today=START, tuning=TUNING)

        self.assertEqual(twice.player, once.player)
        self.assertEqual(twice.player.check_ins[0].created_at, once.player.check_ins[0].created_at)

    def test_changed_payload_gets_new_timestamp(self):
        stored = make_check_in(START, 7)
        once = run(self.player, stored)
        changed = {k: v for k, v in stored.model_dump().items() if k != "created_at"}
        changed["fitness"] = 3

        twice = process_check_in(once.player, changed, noop_save, today=START, tuning=TUNING)
        self.assertEqual(twice.player.check_ins[0].fitness, 3)
        self.assertNotEqual(twice.player.check_ins[0].created_at, stored.created_at)

    def test_longest_streak_never_decreases(self):
        days = [0, 1, 2, 3, 9, 10, 4, 20, 5, 21]
        player = self.player
        longest = 0
        for offset in days:
            day = START + timedelta(days=offset)
            player = run(player, make_check_in(day, 6), today=START + timedelta(days=max(days))).player
            self.assertGreaterEqual(player.longest_streak, longest)
            longest = player.longest_streak
        self.assertEqual(longest, 6)

    def test_level_never_decreases(self):
        player = self.player
        for check_in in consecutive(START, 40, rating=10):
            before = player.progress.level
            player = run(player, check_in).player
            self.assertGreaterEqual(player.progress.level, before)
        self.assertGreater(player.progress.level, 1)

    def test_level_up_reported_with_final_level(self):
        player = self.player.model_copy(update={
            "progress": self.player.progress.model_copy(update={"current_xp": 90}),
        })
        result = run(player, make_check_in(START, 10))
        self.assertTrue(result.leveled_up)
        self.assertEqual(result.player.progress.level, 2)
        self.assertEqual(result.player.progress.current_xp, 90 + result.xp_gained - 100)

    def test_history_newest_first(self):
        player = self.player
        for offset in (2, 0, 1):
            player = run(player, make_check_in(START + timedelta(days=offset)), today=START + timedelta(days=2)).player
        self.assertEqual([c.date for c in player.check_ins],
                         [START + timedelta(days=d) for d in (2, 1, 0)])

    def test_input_player_not_modified(self):
        snapshot = serialize_player(self.player)
        run(self.player, make_check_in(START, 9))
        self.assertEqual(serialize_player(self.player), snapshot)

    def test_stats_and_class_modifier_derived(self):
        result = run(self.player, make_check_in(START, 4, fitness=10))
        self.assertEqual(result.player.stats.strength, 10)
        self.assertEqual(result.player.progress.class_modifier, "Berserker")


class ValidationTests(unittest.TestCase):

    def setUp(self):
        self.player = create_new_player(datetime(2026, 3, 1), TUNING)
        self.save = MagicMock()

    def _process(self, data):
        return process_check_in(self.player, data, self.save, today=START, tuning=TUNING)

    def test_out_of_range_rating_rejected(self):
        data = make_check_in(START).model_dump()
        for bad in (0, 11, -3):
            data["work"] = bad
            with self.assertRaises(CheckInValidationError):
                self._process(data)
        self.save.assert_not_called()

    def test_missing_dimension_rejected(self):
        data = make_check_in(START).model_dump()
        del data["safety"]
        with self.assertRaises(CheckInValidationError) as ctx:
            self._process(data)
        self.assertTrue(ctx.exception.errors)
        self.save.assert_not_called()

    def test_future_date_rejected(self):
        with self.assertRaises(CheckInValidationError):
            self._process(make_check_in(START + timedelta(days=1)))
        self.save.assert_not_called()

    def test_plain_dict_accepted(self):
        result = self._process({
            "date": START.isoformat(),
            "nutrition": 5, "fitness": 5, "work": 5,
            "social": 5, "safety": 5, "health": 5,
        })
        self.assertEqual(result.player.check_ins[0].date, START)
        self.assertIsNotNone(result.player.check_ins[0].created_at)
        self.save.assert_called_once()


class PersistenceTests(unittest.TestCase):

    def setUp(self):
        self.player = create_new_player(datetime(2026, 3, 1), TUNING)

    def test_save_receives_new_state(self):
        save = MagicMock()
        result = process_check_in(self.player, make_check_in(START), save, today=START, tuning=TUNING)
        save.assert_called_once_with(result.player)

    def test_save_failure_raises_and_keeps_old_state(self):
        save = MagicMock(side_effect=IOError("disk full"))
        with self.assertRaises(PersistenceError):
            process_check_in(self.player, make_check_in(START), save, today=START, tuning=TUNING)
        self.assertEqual(self.player.check_ins, [])
        self.assertEqual(self.player.progress.current_xp, 0)

    def test_persistence_error_passes_through(self):
        save = MagicMock(side_effect=PersistenceError("nope"))
        with self.assertRaises(PersistenceError):
            process_check_in(self.player, make_check_in(START), save, today=START, tuning=TUNING)


class RoundTripTests(unittest.TestCase):

    def test_blob_round_trip(self):
        player = create_new_player(datetime(2026, 3, 1, 8, 30), TUNING)
        for check_in in consecutive(START, 5, rating=8):
            player = run(player, check_in).player

        blob = serialize_player(player)
        self.assertEqual(serialize_player(deserialize_player(blob)), blob)
        self.assertEqual(deserialize_player(blob), player)

        data = json.loads(blob)
        self.assertEqual(set(data["stats"]), {"vit", "str", "int", "cha", "def", "sta"})
        self.assertEqual(len(data["check_ins"]), 5)

    def test_new_player_round_trip(self):
        blob = serialize_player(create_new_player(tuning=TUNING))
        self.assertEqual(serialize_player(deserialize_player(blob)), blob)


class DerivedViewTests(unittest.TestCase):

    def test_refresh_breaks_stale_streak_without_touching_longest(self):
        player = create_new_player(datetime(2026, 3, 1), TUNING)
        for check_in in consecutive(START, 3):
            player = run(player, check_in).player

        view = refresh_player(player, START + timedelta(days=10), TUNING)
        self.assertEqual(view.current_streak, 0)
        self.assertEqual(view.longest_streak, 3)
        self.assertGreater(view.bars.fatigue, player.bars.fatigue)
        self.assertEqual(player.current_streak, 3)

    def test_rebuild_matches_incremental_processing(self):
        history = consecutive(START, 6, rating=9) + [make_check_in(START + timedelta(days=9), 3)]
        player = create_new_player(datetime(2026, 3, 1), TUNING)
        for check_in in history:
            player = run(player, check_in).player

        rebuilt = rebuild_player(list(reversed(history)), created_at=player.created_at, tuning=TUNING)
        self.assertEqual(rebuilt, player)


class CheckInServiceTests(unittest.TestCase):

    def test_submit_loads_processes_and_saves(self):
        store = MagicMock()
        store.load.return_value = create_new_player(datetime(2026, 3, 1), TUNING)
        service = CheckInService(store, TUNING)

        result = service.submit(make_check_in(START), today=START)

        store.load.assert_called_once()
        store.save.assert_called_once_with(result.player)

    def test_today_and_recent(self):
        player = create_new_player(datetime(2026, 3, 1), TUNING)
        for check_in in consecutive(START, 9):
            player = run(player, check_in).player
        store = MagicMock()
        store.load.return_value = player
        service = CheckInService(store, TUNING)

        self.assertEqual(service.get_today_check_in(START + timedelta(days=8)).date, START + timedelta(days=8))
        self.assertIsNone(service.get_today_check_in(START + timedelta(days=9)))
        self.assertEqual(len(service.recent_check_ins(7)), 7)
        self.assertEqual(service.recent_check_ins(7)[0].date, START + timedelta(days=8))


if __name__ == "__main__":
    unittest.main()
