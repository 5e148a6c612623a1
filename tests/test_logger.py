import io
import logging
import unittest

from shikaku.utils.logger import PACKAGE_LOGGER, configure_logging, get_logger


class LoggerTests(unittest.TestCase):
    def setUp(self) -> None:
        package = logging.getLogger(PACKAGE_LOGGER)
        saved = (list(package.handlers), package.level, package.propagate)

        def restore() -> None:
            package.handlers[:] = saved[0]
            package.setLevel(saved[1])
            package.propagate = saved[2]

        self.addCleanup(restore)

    def test_records_use_package_format(self) -> None:
        stream = io.StringIO()
        configure_logging(logging.INFO, stream=stream)
        get_logger("shikaku.engine.example").info("attempt %d", 3)
        line = stream.getvalue().strip()
        self.assertTrue(line.endswith("| INFO    | shikaku.engine.example | attempt 3"), line)

    def test_level_filters_records(self) -> None:
        stream = io.StringIO()
        configure_logging(logging.WARNING, stream=stream)
        get_logger("shikaku.engine.example").info("hidden")
        self.assertEqual(stream.getvalue(), "")

    def test_reconfigure_replaces_handler(self) -> None:
        configure_logging(logging.INFO, stream=io.StringIO())
        configure_logging(logging.INFO, stream=io.StringIO())
        self.assertEqual(len(logging.getLogger(PACKAGE_LOGGER).handlers), 1)

    def test_foreign_names_are_nested(self) -> None:
        self.assertEqual(get_logger("debug_main").name, "shikaku.debug_main")
        self.assertEqual(get_logger().name, PACKAGE_LOGGER)
        self.assertEqual(get_logger("shikaku.engine.solver").name, "shikaku.engine.solver")
