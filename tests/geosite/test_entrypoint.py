import unittest
from unittest.mock import MagicMock, patch

from src.geosite import __main__ as entrypoint
from src.geosite.application.errors import ReleaseFetchError
from src.geosite.release import build_pipeline
from src.geosite.infrastructure.sinks.composite_sink import CompositeRuleSetSink
from src.geosite.infrastructure.sinks.rule_set_json_sink import JsonRuleSetSink
from src.geosite.infrastructure.sinks.rule_set_srs_sink import SrsRuleSetSink


class EntrypointTests(unittest.TestCase):
    def test_release_mode_passes_settings(self):
        result = MagicMock(skipped=True, reason="already_latest", source_release="1")
        with (
            patch.object(entrypoint.settings, "ACCESS_TOKEN", "token"),
            patch.object(entrypoint.settings, "NO_SKIP", False),
            patch("src.geosite.__main__.run_release", return_value=result) as run_release,
        ):
            self.assertEqual(entrypoint.main([]), 0)

        kwargs = run_release.call_args.kwargs
        self.assertEqual(kwargs["access_token"], "token")
        self.assertFalse(kwargs["force"])
        self.assertEqual(kwargs["source_repository"], entrypoint.settings.SOURCE_REPOSITORY)

    def test_force_flag(self):
        result = MagicMock(skipped=False, reason="forced", source_release="1")
        with patch("src.geosite.__main__.run_release", return_value=result) as run_release:
            entrypoint.main(["--force"])
        self.assertTrue(run_release.call_args.kwargs["force"])

    def test_local_input_uses_generate(self):
        with patch("src.geosite.__main__.run_generate") as run_generate:
            self.assertEqual(entrypoint.main(["--input", "geosite.dat"]), 0)
        self.assertEqual(run_generate.call_args.args, ("geosite.dat",))

    def test_failure_returns_non_zero(self):
        with patch("src.geosite.__main__.run_release", side_effect=ReleaseFetchError("boom")):
            self.assertEqual(entrypoint.main([]), 1)


class BuildPipelineTests(unittest.TestCase):
    def test_binary_rule_sets_are_written_before_text(self):
        pipeline = build_pipeline(rule_set_output_dir="out/rule-set", sing_box_path="/opt/sing-box")
        sink = pipeline.rule_set_sink
        self.assertIsInstance(sink, CompositeRuleSetSink)
        self.assertIsInstance(sink.primary, SrsRuleSetSink)
        self.assertIsInstance(sink.secondary, JsonRuleSetSink)
        self.assertEqual(sink.primary.sing_box_path, "/opt/sing-box")
