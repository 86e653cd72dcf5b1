import time
import unittest

from sheet_gen.domain.phases import LINK_PHASES, UPLOAD_PHASES, phase_for, phase_index
from sheet_gen.handlers import ProgressEstimator


class TestPhaseTable(unittest.TestCase):
    def test_phase_changes_only_at_thresholds_and_never_reverts(self):
        samples = [0, 10, 20, 30, 60, 90, 120, 150, 180]
        texts = [phase_for(elapsed, LINK_PHASES) for elapsed in samples]
        order = [text for _, text in LINK_PHASES]

        self.assertEqual(texts[0], "Downloading audio...")
        self.assertEqual(texts[1], texts[2])
        self.assertEqual(texts[4], texts[5])
        self.assertEqual(texts[6], texts[7])
        self.assertEqual(texts[7], texts[8])

        indexes = [order.index(text) for text in texts]
        self.assertEqual(indexes, sorted(indexes))
        self.assertEqual(indexes, [0, 1, 1, 2, 3, 3, 4, 4, 4])

    def test_between_thresholds_keeps_previous_phase(self):
        self.assertEqual(phase_for(9.99, LINK_PHASES), LINK_PHASES[0][1])
        self.assertEqual(phase_for(29.5, UPLOAD_PHASES), UPLOAD_PHASES[1][1])

    def test_tables_are_ascending(self):
        for table in (LINK_PHASES, UPLOAD_PHASES):
            thresholds = [threshold for threshold, _ in table]
            self.assertEqual(thresholds, sorted(thresholds))
            self.assertEqual(thresholds[0], 0)

    def test_empty_table_rejected(self):
        with self.assertRaises(ValueError):
            phase_for(5, ())
        with self.assertRaises(ValueError):
            phase_index(5, ())

    def test_phase_index_at_thresholds(self):
        self.assertEqual(phase_index(0, LINK_PHASES), 0)
        self.assertEqual(phase_index(10, LINK_PHASES), 1)
        self.assertEqual(phase_index(119.9, LINK_PHASES), 3)
        self.assertEqual(phase_index(10_000, LINK_PHASES), len(LINK_PHASES) - 1)


class TestProgressEstimator(unittest.TestCase):
    def test_ticks_advance_through_phases_without_regressing(self):
        seen = []
        estimator = ProgressEstimator(LINK_PHASES, seen.append, tick_seconds=10)

        messages = [estimator.tick() for _ in range(18)]

        self.assertEqual(estimator.elapsed_seconds, 180)
        order = [text for _, text in LINK_PHASES]
        indexes = [order.index(message) for message in messages]
        self.assertEqual(indexes, sorted(indexes))
        self.assertEqual(seen, order[1:])

    def test_estimator_follows_phase_table_at_sample_times(self):
        samples = [0, 10, 20, 30, 60, 90, 120, 150, 180]
        estimator = ProgressEstimator(LINK_PHASES, lambda _: None, tick_seconds=10)

        texts = {0: estimator.phase_message}
        for _ in range(18):
            estimator.tick()
            texts[round(estimator.elapsed_seconds)] = estimator.phase_message

        order = [text for _, text in LINK_PHASES]
        indexes = [order.index(texts[elapsed]) for elapsed in samples]
        self.assertEqual(indexes, [0, 1, 1, 2, 3, 3, 4, 4, 4])
        self.assertEqual(
            [texts[elapsed] for elapsed in samples],
            [phase_for(elapsed, LINK_PHASES) for elapsed in samples],
        )

    def test_start_reports_first_phase_and_stop_deactivates(self):
        seen = []
        estimator = ProgressEstimator(UPLOAD_PHASES, seen.append, tick_seconds=3600)
        self.assertFalse(estimator.is_active)

        estimator.start()
        self.assertTrue(estimator.is_active)
        self.assertEqual(seen, [UPLOAD_PHASES[0][1]])

        estimator.stop()
        estimator.stop()
        self.assertFalse(estimator.is_active)
        self.assertEqual(estimator.tick(), UPLOAD_PHASES[0][1])
        self.assertEqual(estimator.elapsed_seconds, 0)

    def test_cannot_start_twice(self):
        estimator = ProgressEstimator(LINK_PHASES, lambda _: None, tick_seconds=3600)
        estimator.start()
        self.addCleanup(estimator.stop)
        with self.assertRaises(RuntimeError):
            estimator.start()

    def test_timer_thread_ticks(self):
        seen = []
        phases = ((0, "first"), (0.05, "second"))
        estimator = ProgressEstimator(phases, seen.append, tick_seconds=0.02)
        estimator.start()
        self.addCleanup(estimator.stop)

        deadline = time.monotonic() + 2
        while "second" not in seen and time.monotonic() < deadline:
            time.sleep(0.01)
        self.assertEqual(seen, ["first", "second"])

    def test_invalid_arguments(self):
        with self.assertRaises(ValueError):
            ProgressEstimator((), lambda _: None)
        with self.assertRaises(ValueError):
            ProgressEstimator(LINK_PHASES, lambda _: None, tick_seconds=0)


if __name__ == "__main__":
    unittest.main()
