import unittest

from loguru import logger

from secretserver._internal.diagnostics import (
    DiagnosticEvent,
    FIELD_LOOKUP_MISS,
    log_observer,
)
from secretserver.api.types.secret import Secret


class TestLogObserver(unittest.TestCase):
    def setUp(self):
        self.messages = []
        self.handler_id = logger.add(self.messages.append, level="DEBUG")

    def tearDown(self):
        logger.remove(self.handler_id)

    def test_event_is_logged_at_debug(self):
        log_observer(DiagnosticEvent(FIELD_LOOKUP_MISS, "no matching field"))
        self.assertEqual(len(self.messages), 1)
        self.assertIn("[field_lookup_miss] no matching field", self.messages[0])
        self.assertEqual(self.messages[0].record["level"].name, "DEBUG")

    def test_default_observer_of_field_lookup(self):
        value, ok = Secret(name="Empty").field("password")
        self.assertEqual((value, ok), ("", False))
        self.assertTrue(
            any("no matching field for name 'password'" in m for m in self.messages)
        )


if __name__ == "__main__":
    unittest.main()
