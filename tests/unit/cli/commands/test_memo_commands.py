"""Unit tests for the memo commands."""

import json

import click
import pytest

from transport_billing.cli import cli
from transport_billing.cli.commands.memo import parse_assignments


class TestParseAssignments:
    """Test FIELD=VALUE parsing."""

    def test_pairs(self):
        assert parse_assignments(["starting_time1=09:00", " remark =a=b"]) == {
            "starting_time1": "09:00",
            "remark": "a=b",
        }

    def test_empty_value_allowed(self):
        assert parse_assignments(["service_item2="]) == {"service_item2": ""}

    @pytest.mark.parametrize("assignment", ["starting_time1", "=09:00"])
    def test_invalid_pair(self, assignment):
        with pytest.raises(click.BadParameter):
            parse_assignments([assignment])


class TestMemoCalc:
    """Test the memo calc command."""

    def test_calc_json(self, runner, cli_env):
        result = runner.invoke(
            cli,
            [
                "memo",
                "calc",
                "--set", "starting_time1=09:00",
                "--set", "closing_time1=15:30",
                "--set", "minimum_hours1=4",
                "--set", "minimum_charges1=1000",
                "--set", "additional_hour_rate=200",
                "--json",
            ],
        )

        assert result.exit_code == 0
        derived = json.loads(result.output)
        assert derived["total_hours"] == "6.50"
        assert derived["extra_hours"] == "2.50"
        assert "total_amount_in_words" in derived

    def test_calc_does_not_open_database(self, runner, cli_env):
        result = runner.invoke(cli, ["memo", "calc"])

        assert result.exit_code == 0
        assert "total_amount" in result.output
        assert not cli_env.exists()

    def test_derived_field_rejected(self, runner, cli_env):
        result = runner.invoke(cli, ["memo", "calc", "--set", "total_amount=5"])

        assert result.exit_code == 4
        assert "derived" in result.output

    def test_bad_assignment(self, runner, cli_env):
        result = runner.invoke(cli, ["memo", "calc", "--set", "oops"])

        assert result.exit_code == 2
        assert "Expected FIELD=VALUE" in result.output


class TestMemoCreate:
    """Test the memo create command."""

    def test_create_with_customer_and_service(self, runner, cli_env):
        result = runner.invoke(
            cli,
            [
                "memo",
                "create",
                "--date", "2024-08-01",
                "--customer", "John Doe",
                "--service", "Area_1_Guindy_TATA_ACE",
                "--set", "vehicle_no=TN09XY4321",
            ],
        )

        assert result.exit_code == 0
        assert "SVS-002" in result.output

        shown = runner.invoke(cli, ["memo", "show", "SVS-002", "--json"])
        memo = json.loads(shown.output)
        assert memo["operated_date"] == "2024-08-01"
        assert memo["customer_address1"] == "123 Main St"
        assert memo["service_item1"] == "Area_1_Guindy_TATA_ACE"
        assert memo["vehicle_type"] == "TATA ACE"
        assert memo["minimum_charges1"] == "600"
        assert memo["vehicle_no"] == "TN09XY4321"

    def test_warnings_do_not_block_save(self, runner, cli_env):
        result = runner.invoke(cli, ["memo", "create"])

        assert result.exit_code == 0
        assert "No customer selected" in result.output
        assert "SVS-002" in result.output

    def test_invalid_date(self, runner, cli_env):
        result = runner.invoke(cli, ["memo", "create", "--date", "01/08/2024"])

        assert result.exit_code == 2
        assert "Invalid date" in result.output


class TestMemoUpdate:
    """Test the memo update command."""

    def test_update_recomputes(self, runner, cli_env):
        result = runner.invoke(
            cli, ["memo", "update", "SVS-001", "--set", "closing_time1=15:00"]
        )

        assert result.exit_code == 0
        memo = json.loads(
            runner.invoke(cli, ["memo", "show", "SVS-001", "--json"]).output
        )
        assert memo["total_hours"] == "6.00"
        assert memo["extra_hours"] == "2.00"

    def test_missing_memo_number_blocks_save(self, runner, cli_env):
        result = runner.invoke(
            cli, ["memo", "update", "SVS-001", "--set", "memo_no="]
        )

        assert result.exit_code == 4
        assert "Memo number is required" in result.output
        assert "was not saved" in result.output

    def test_unknown_memo(self, runner, cli_env):
        result = runner.invoke(cli, ["memo", "update", "SVS-404"])

        assert result.exit_code == 3
        assert "Memo SVS-404 not found" in result.output


class TestMemoListShowDelete:
    """Test listing, showing and deleting memos."""

    def test_list(self, runner, cli_env):
        result = runner.invoke(cli, ["memo", "list"])

        assert result.exit_code == 0
        assert "SVS-001" in result.output
        assert "Found 1 memo(s)" in result.output

    def test_list_filters(self, runner, cli_env):
        result = runner.invoke(cli, ["memo", "list", "--status", "completed"])

        assert result.exit_code == 0
        assert "No memos found." in result.output

        result = runner.invoke(cli, ["memo", "list", "--customer", "john doe"])
        assert "SVS-001" in result.output

    def test_show_table(self, runner, cli_env):
        result = runner.invoke(cli, ["memo", "show", "SVS-001"])

        assert result.exit_code == 0
        assert "123 Main St, Anytown" in result.output
        assert "1000.00" in result.output

    def test_delete(self, runner, cli_env):
        result = runner.invoke(cli, ["memo", "delete", "SVS-001", "--yes"])

        assert result.exit_code == 0
        assert "deleted" in result.output
        assert "No memos found." in runner.invoke(cli, ["memo", "list"]).output

    def test_delete_cancelled(self, runner, cli_env):
        result = runner.invoke(cli, ["memo", "delete", "SVS-001"], input="n\n")

        assert result.exit_code == 130
        assert "SVS-001" in runner.invoke(cli, ["memo", "list"]).output
