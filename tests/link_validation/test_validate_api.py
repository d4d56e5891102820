import io
import json
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

from src.config.settings import ValidatorSettings
from src.link_validation.domain.errors import SettingsError
from src.link_validation.domain.models import RunSummary
from src.link_validation.validate import main, run_validation, run_validation_async
from tests.link_validation.application.fakes import RoutingProber
from tests.utils.tempdir import managed_temp_dir


def fast_settings(**overrides) -> ValidatorSettings:
    values = {
        "batch_pause_ms": 0,
        "min_start_interval_ms": 0,
        "base_url": "https://wiki.invalid/wiki/",
    }
    values.update(overrides)
    return ValidatorSettings(**values)


def write_dataset(tmp, galaxies):
    path = tmp / "galaxies.json"
    path.write_text(json.dumps({"galaxies": galaxies}), encoding="utf-8")
    return path


class RunValidationApiTests(unittest.TestCase):
    def test_run_validation_sync_wrapper(self):
        expected = RunSummary(total=1, completed=1, valid_count=1)
        with patch("src.link_validation.validate.run_validation_async", new=AsyncMock(return_value=expected)):
            result = run_validation(settings=fast_settings())
        self.assertEqual(result, expected)


class RunValidationAsyncTests(unittest.IsolatedAsyncioTestCase):
    async def test_loads_dataset_and_validates_every_record(self):
        prober = RoutingProber(statuses={"Calypso": 404})
        with managed_temp_dir("validate_async") as tmp:
            path = write_dataset(tmp, [{"id": 1, "name": "Euclid"}, {"id": 2, "name": "Calypso"}])
            with patch("src.link_validation.validate.HttpProber", return_value=prober):
                summary = await run_validation_async(
                    dataset_path=path,
                    settings=fast_settings(),
                    show_progress=False,
                )

        self.assertEqual(summary.completed, 2)
        self.assertEqual([item.record_id for item in summary.invalid], [2])
        self.assertEqual(
            sorted(url for _, url in prober.calls),
            ["https://wiki.invalid/wiki/Calypso", "https://wiki.invalid/wiki/Euclid"],
        )


class MainTests(unittest.TestCase):
    def run_main(self, argv, settings=None):
        stdout, stderr = io.StringIO(), io.StringIO()
        with (
            patch("src.link_validation.validate.load_settings", return_value=settings or fast_settings()),
            patch("src.link_validation.validate.configure_logging"),
            redirect_stdout(stdout),
            redirect_stderr(stderr),
        ):
            code = main(argv)
        return code, stdout.getvalue(), stderr.getvalue()

    def test_all_valid_prints_summary_and_exits_zero(self):
        prober = RoutingProber()
        with managed_temp_dir("main_valid") as tmp:
            path = write_dataset(tmp, [{"id": 1, "name": "Euclid"}, {"id": 2, "name": "Hilbert Dimension"}])
            with patch("src.link_validation.validate.HttpProber", return_value=prober):
                code, out, err = self.run_main(["--dataset", str(path)])

        self.assertEqual(code, 0)
        self.assertEqual(out, "All 2 galaxy links are valid.\n")
        self.assertIn("Validating 2 galaxies...", err)
        self.assertIn("Progress: 2/2 (100%)", err)

    def test_invalid_links_are_listed_and_exit_one(self):
        prober = RoutingProber(statuses={"Calypso": 404})
        with managed_temp_dir("main_invalid") as tmp:
            path = write_dataset(tmp, [{"id": 1, "name": "Euclid"}, {"id": 3, "name": "Calypso"}])
            with patch("src.link_validation.validate.HttpProber", return_value=prober):
                code, out, err = self.run_main(["--dataset", str(path), "--no-progress"])

        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertIn("Invalid links (1):", err)
        self.assertIn("- [3] Calypso -> https://wiki.invalid/wiki/Calypso :: HTTP 404", err)
        self.assertNotIn("Progress:", err)

    def test_empty_dataset_exits_one_without_network(self):
        prober_cls = MagicMock()
        with managed_temp_dir("main_empty") as tmp:
            path = write_dataset(tmp, [])
            with patch("src.link_validation.validate.HttpProber", new=prober_cls):
                code, out, err = self.run_main(["--dataset", str(path)])

        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertIn("No galaxies found", err)
        prober_cls.assert_not_called()

    def test_base_url_flag_overrides_settings(self):
        prober = RoutingProber()
        with managed_temp_dir("main_base_url") as tmp:
            path = write_dataset(tmp, [{"id": 1, "name": "Euclid"}])
            with patch("src.link_validation.validate.HttpProber", return_value=prober):
                code, _, _ = self.run_main(["--dataset", str(path), "--base-url", "http://other.invalid/w/"])

        self.assertEqual(code, 0)
        self.assertEqual(prober.calls, [("HEAD", "http://other.invalid/w/Euclid")])

    def test_settings_error_exits_one(self):
        stderr = io.StringIO()
        with (
            patch("src.link_validation.validate.load_settings", side_effect=SettingsError("bad value")),
            redirect_stderr(stderr),
            redirect_stdout(io.StringIO()),
        ):
            code = main([])
        self.assertEqual(code, 1)
        self.assertIn("bad value", stderr.getvalue())

    def test_unexpected_error_is_reported_and_exits_one(self):
        with patch("src.link_validation.validate.run_validation", side_effect=RuntimeError("boom")):
            code, out, err = self.run_main([])

        self.assertEqual(code, 1)
        self.assertIn("Unexpected error: boom", err)

    def test_logging_is_configured_from_loaded_settings(self):
        settings = fast_settings(log_level="DEBUG", log_dir=Path("custom-logs"))
        with (
            patch("src.link_validation.validate.load_settings", return_value=settings),
            patch("src.link_validation.validate.configure_logging") as configure,
            patch("src.link_validation.validate.run_validation", return_value=RunSummary(total=1, completed=1, valid_count=1)),
            redirect_stdout(io.StringIO()),
            redirect_stderr(io.StringIO()),
        ):
            code = main([])

        self.assertEqual(code, 0)
        configure.assert_called_once_with("DEBUG", Path("custom-logs"))
