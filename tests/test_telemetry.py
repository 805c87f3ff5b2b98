"""Tests for ActionLogger — JSONL action logging."""

import json
from unittest.mock import MagicMock

import pytest

from pokerround.core.telemetry import ActionLogger
from pokerround.holdem.actions import Move, SeatAction, StartRound, Win


@pytest.fixture
def logger(tmp_path):
    return ActionLogger(output_dir=tmp_path, table_id="table-001")


def _lines(path):
    return [json.loads(line) for line in path.read_text().strip().split("\n")]


class TestActionLogger:
    def test_log_action_creates_file(self, logger, tmp_path):
        logger.log_action(0, StartRound(0, 1, 2))
        assert (tmp_path / "table-001.jsonl").exists()

    def test_records_carry_envelope(self, logger):
        logger.log_action(0, StartRound(0, 1, 2))
        logger.log_action(0, SeatAction(1, Move.BLIND, 1))
        records = _lines(logger.file_path)
        assert [r["seq"] for r in records] == [0, 1]
        for record in records:
            for field in ("record_type", "schema_version", "table_id", "round_id", "timestamp", "type"):
                assert field in record, f"Missing field: {field}"
        assert records[1]["type"] == "blind"
        assert records[1]["amount"] == 1

    def test_win_serialised(self, logger):
        logger.log_action(3, Win(((2, 40), (0, 39))))
        record = _lines(logger.file_path)[0]
        assert record["wins"] == [[2, 40], [0, 39]]
        assert record["round_id"] == 3

    def test_finalize_appends_summary(self, logger):
        logger.log_action(0, StartRound(0, 1, 2))
        logger.finalize_table([0, 150, 50], busted=[0], extra={"rounds_played": 7})
        summary = _lines(logger.file_path)[-1]
        assert summary["record_type"] == "table_summary"
        assert summary["final_stacks"] == [0, 150, 50]
        assert summary["busted"] == [0]
        assert summary["actions_logged"] == 1
        assert summary["rounds_played"] == 7
        assert "engine_version" in summary

    def test_sink_receives_records(self, tmp_path):
        sink = MagicMock()
        logger = ActionLogger(tmp_path, "t", sink=sink)
        logger.log_action(0, StartRound(0, 1, 2))
        sink.log_action.assert_called_once()
        assert sink.log_action.call_args.args[0] == "t"

    def test_sink_errors_do_not_break_jsonl(self, tmp_path):
        sink = MagicMock()
        sink.log_action.side_effect = RuntimeError("down")
        logger = ActionLogger(tmp_path, "t", sink=sink)
        logger.log_action(0, StartRound(0, 1, 2))
        assert len(_lines(logger.file_path)) == 1

    def test_creates_output_dir(self, tmp_output):
        ActionLogger(tmp_output / "nested", "t")
        assert (tmp_output / "nested").is_dir()
