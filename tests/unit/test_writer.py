"""Unit tests for event log row formatting."""

from explorer.models import LogisticsEventLog
from explorer.services.decoding.log_decoder import EventOccurrence, EventParam
from explorer.services.sync.writer import event_log_row, format_param_value
from tests.factories import address, tx_hash


def occurrence(param_count: int) -> EventOccurrence:
    return EventOccurrence(
        name="Wide",
        log_index=3,
        address=address(0x5E),
        params=tuple(
            EventParam(name=f"arg{i}", type="uint256", value=i * 10)
            for i in range(1, param_count + 1)
        ),
    )


class TestFormatParamValue:
    def test_bool(self):
        assert format_param_value(True) == "true"
        assert format_param_value(False) == "false"

    def test_list(self):
        assert format_param_value([1, True, "a"]) == "[1,true,a]"

    def test_large_int(self):
        assert format_param_value(2**256 - 1) == str(2**256 - 1)


class TestEventLogRow:
    def test_first_four_params_kept(self):
        """A six-parameter event keeps four columns and its real count."""
        row = event_log_row(occurrence(6), tx_hash(1), 77)

        assert row["param_count"] == 6
        assert row["param_name_04"] == "arg4"
        assert row["param_type_04"] == "uint256"
        assert row["param_data_04"] == "40"
        assert not any(key.endswith(("_05", "_06")) for key in row)
        assert not hasattr(LogisticsEventLog, "param_data_05")
        LogisticsEventLog(**row)

    def test_short_event(self):
        row = event_log_row(occurrence(1), tx_hash(1), 77)

        assert row["param_count"] == 1
        assert row["param_data_01"] == "10"
        assert "param_name_02" not in row
        assert (row["tx_hash"], row["block_number"], row["log_index"]) == (
            tx_hash(1),
            77,
            3,
        )

    def test_no_params(self):
        row = event_log_row(occurrence(0), tx_hash(2), 5)

        assert row["param_count"] == 0
        assert row["event_name"] == "Wide"
