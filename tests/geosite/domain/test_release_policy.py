import unittest

from src.geosite.domain.release_policy import evaluate_release_decision


class ReleaseDecisionTests(unittest.TestCase):
    def test_skip_when_destination_contains_source_name(self):
        decision = evaluate_release_decision("202410182210", "Release 202410182210")
        self.assertFalse(decision.should_generate)
        self.assertEqual(decision.reason, "already_latest")

    def test_generate_when_source_is_newer(self):
        decision = evaluate_release_decision("202410192210", "202410182210")
        self.assertTrue(decision.should_generate)
        self.assertEqual(decision.reason, "source_newer")

    def test_generate_when_destination_missing(self):
        decision = evaluate_release_decision("202410182210", None)
        self.assertTrue(decision.should_generate)
        self.assertEqual(decision.reason, "destination_missing")

    def test_force_overrides_skip(self):
        decision = evaluate_release_decision("202410182210", "202410182210", force=True)
        self.assertTrue(decision.should_generate)
        self.assertEqual(decision.reason, "forced")
