import logging
import pathlib
import tempfile
import unittest

from symkit.core import LevelFlag, LoggerConfigurator, SymkitLogger, getLogger
from symkit.core.logging import (
    LOG_FILENAME,
    Z3_PROOF_FILENAME,
    SymkitFormatter,
    build_config,
    clear_logs,
)


class TestLoggerConfigurator(unittest.TestCase):
    def setUp(self):
        self.prefix = "symkit"
        self.test_logger_name = f"{self.prefix}.testunit"
        self.logger = getLogger(self.test_logger_name)
        self.logger.setLevel(logging.WARNING)
        self.root_logger = logging.getLogger(self.prefix)
        self.root_logger.setLevel(logging.WARNING)

    def test_get_logger_returns_symkit_logger(self):
        self.assertIsInstance(self.logger, SymkitLogger)
        self.assertIs(getLogger(self.test_logger_name), self.logger)

    def test_available_loggers_with_prefix(self):
        names = LoggerConfigurator.available_loggers(self.prefix)
        self.assertIn(self.test_logger_name, names)
        self.assertIn(self.prefix, names)

    def test_available_loggers_case_insensitive(self):
        names = LoggerConfigurator.available_loggers("SYMKIT", case_insensitive=True)
        self.assertIn(self.test_logger_name, names)

    def test_available_loggers_lists_static_config(self):
        names = LoggerConfigurator.available_loggers()
        self.assertIn("symkit.z3", names)

    def test_set_level_changes_level(self):
        LoggerConfigurator.set_level(self.test_logger_name, "DEBUG")
        self.assertEqual(self.logger.level, logging.DEBUG)

    def test_set_level_invalid_raises(self):
        with self.assertRaises(ValueError):
            LoggerConfigurator.set_level(self.test_logger_name, "NOTALEVEL")

    def test_level_flag_follows_set_level(self):
        flag = LevelFlag(self.test_logger_name, logging.DEBUG)
        LoggerConfigurator.set_level(self.test_logger_name, "WARNING")
        self.assertFalse(flag)
        LoggerConfigurator.set_level(self.test_logger_name, "DEBUG")
        self.assertTrue(flag)


class TestMDC(unittest.TestCase):
    def tearDown(self):
        SymkitLogger.reset_phase()

    def test_update_phase(self):
        SymkitLogger.update_phase("simplify")
        self.assertEqual(SymkitLogger.get_mdc("phase"), "simplify")

    def test_phase_context_restores_previous(self):
        SymkitLogger.update_phase("outer")
        with SymkitLogger.phase("inner"):
            self.assertEqual(SymkitLogger.get_mdc("phase"), "inner")
        self.assertEqual(SymkitLogger.get_mdc("phase"), "outer")

    def test_phase_restored_on_error(self):
        SymkitLogger.update_phase("outer")
        with self.assertRaises(RuntimeError):
            with SymkitLogger.phase("inner"):
                raise RuntimeError("boom")
        self.assertEqual(SymkitLogger.get_mdc("phase"), "outer")

    def test_records_carry_phase(self):
        log = getLogger("symkit.testunit.mdc")
        with SymkitLogger.phase("equation"):
            record = log.makeRecord(log.name, logging.INFO, __file__, 1, "msg", (), None)
        self.assertEqual(record.phase, "equation")

    def test_formatter_renders_phase_suffix(self):
        formatter = SymkitFormatter("%(levelname)s%(phase)s - %(message)s")
        record = logging.LogRecord("symkit", logging.INFO, __file__, 1, "hi", (), None)
        record.phase = "derive"
        self.assertEqual(formatter.format(record), "INFO - derive - hi")


class TestBuildConfig(unittest.TestCase):
    def test_file_handlers_point_into_log_dir(self):
        log_dir = pathlib.Path("/tmp/symkit-logs")
        handlers = build_config(log_dir)["handlers"]
        self.assertEqual(handlers["file"]["filename"], (log_dir / LOG_FILENAME).as_posix())
        self.assertEqual(
            handlers["z3_proofs"]["filename"], (log_dir / Z3_PROOF_FILENAME).as_posix()
        )

    def test_z3_logger_does_not_propagate(self):
        loggers = build_config(pathlib.Path("logs"))["loggers"]
        self.assertEqual(loggers["symkit.z3"]["handlers"], ["z3_proofs"])
        self.assertFalse(loggers["symkit.z3"]["propagate"])


class TestClearLogs(unittest.TestCase):
    def test_clear_logs_removes_directory(self):
        with tempfile.TemporaryDirectory() as tmp:
            log_dir = pathlib.Path(tmp) / "logs"
            log_dir.mkdir()
            (log_dir / "symkit.log").write_text("x")
            clear_logs(log_dir)
            self.assertFalse(log_dir.exists())


if __name__ == "__main__":
    unittest.main()
