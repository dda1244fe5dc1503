"""Tests for the startup database ping with linear backoff and its lifespan wiring."""

import asyncio
import unittest
from unittest.mock import MagicMock, call, patch

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from app.core.database import DatabaseUnavailableError, wait_for_database
from app.main import app


def _down() -> OperationalError:
    return OperationalError("SELECT 1", {}, Exception("connection refused"))


class TestWaitForDatabase(unittest.TestCase):
    def test_first_attempt_succeeds_without_sleeping(self) -> None:
        engine = MagicMock()
        sleep = MagicMock()
        wait_for_database(engine, retries=3, backoff_sec=1.0, sleep=sleep)
        engine.connect.assert_called_once()
        sleep.assert_not_called()

    def test_retries_with_linear_backoff_then_succeeds(self) -> None:
        engine = MagicMock()
        engine.connect.side_effect = [_down(), _down(), MagicMock()]
        sleep = MagicMock()
        with self.assertLogs("app.core.database", level="WARNING") as logs:
            wait_for_database(engine, retries=3, backoff_sec=0.5, sleep=sleep)
        self.assertEqual(engine.connect.call_count, 3)
        self.assertEqual(sleep.call_args_list, [call(0.5), call(1.0)])
        self.assertEqual(len([r for r in logs.records if r.levelname == "WARNING"]), 2)

    def test_all_attempts_fail(self) -> None:
        engine = MagicMock()
        engine.connect.side_effect = _down()
        sleep = MagicMock()
        with self.assertLogs("app.core.database", level="ERROR"):
            with self.assertRaises(DatabaseUnavailableError) as ctx:
                wait_for_database(engine, retries=3, backoff_sec=1.0, sleep=sleep)
        self.assertEqual(engine.connect.call_count, 3)
        # No sleep after the final attempt.
        self.assertEqual(sleep.call_args_list, [call(1.0), call(2.0)])
        self.assertIsInstance(ctx.exception.__cause__, OperationalError)
        self.assertIn("3 attempts", ctx.exception.message)

    def test_single_attempt_never_sleeps(self) -> None:
        engine = MagicMock()
        engine.connect.side_effect = _down()
        sleep = MagicMock()
        with self.assertLogs("app.core.database", level="ERROR"):
            with self.assertRaises(DatabaseUnavailableError):
                wait_for_database(engine, retries=1, backoff_sec=1.0, sleep=sleep)
        sleep.assert_not_called()


class TestStartupLifespan(unittest.TestCase):
    def test_database_wait_runs_off_the_event_loop(self) -> None:
        loop_state: dict[str, bool] = {}

        def record_loop(*args: object, **kwargs: object) -> None:
            try:
                asyncio.get_running_loop()
                loop_state["on_event_loop"] = True
            except RuntimeError:
                loop_state["on_event_loop"] = False

        with (
            patch("app.main.wait_for_database", side_effect=record_loop) as wait,
            patch("app.main.engine") as engine,
        ):
            with TestClient(app):
                pass

        wait.assert_called_once()
        self.assertIs(wait.call_args.args[0], engine)
        self.assertFalse(loop_state["on_event_loop"])
        engine.dispose.assert_called_once()


if __name__ == "__main__":
    unittest.main()
