"""Unit tests for the flat table commands."""

from transport_billing.cli import cli


class TestTableList:
    """Test the table list command."""

    def test_list_headerless_table(self, runner, cli_env):
        result = runner.invoke(cli, ["table", "list", "areas", "--search", "guindy"])

        assert result.exit_code == 0
        assert "Column 1" in result.output
        assert "Guindy" in result.output
        assert "1 row(s)" in result.output

    def test_list_headed_table(self, runner, cli_env):
        result = runner.invoke(cli, ["table", "list", "lookup"])

        assert result.exit_code == 0
        assert "driver_name" in result.output
        assert "2 row(s)" in result.output

    def test_no_match(self, runner, cli_env):
        result = runner.invoke(cli, ["table", "list", "areas", "--search", "Mumbai"])

        assert result.exit_code == 0
        assert "No rows found in areas." in result.output

    def test_unknown_table(self, runner, cli_env):
        result = runner.invoke(cli, ["table", "list", "memos"])

        assert result.exit_code == 2


class TestTableEdits:
    """Test adding, updating and deleting rows."""

    def test_add(self, runner, cli_env):
        result = runner.invoke(cli, ["table", "add", "areas", "Madhavaram", "Area 2"])

        assert result.exit_code == 0
        assert "Row added to 'areas'" in result.output
        listed = runner.invoke(cli, ["table", "list", "areas", "--search", "Madhav"])
        assert "Area 2" in listed.output

    def test_update(self, runner, cli_env):
        result = runner.invoke(
            cli,
            ["table", "update", "areas", "-s", "Guindy", "-s", "Area 1",
             "-t", "Guindy", "-t", "Area 2"],
        )

        assert result.exit_code == 0
        assert "Row 2 of 'areas' updated" in result.output
        listed = runner.invoke(cli, ["table", "list", "areas", "--search", "Guindy"])
        assert "Area 2" in listed.output

    def test_update_headed_table_skips_header(self, runner, cli_env):
        result = runner.invoke(
            cli,
            ["table", "update", "lookup",
             "-s", "Kumar", "-s", "TN-02-B-5678", "-s", "9876543211",
             "-t", "Kumar", "-t", "TN-02-B-5678", "-t", "9000000000"],
        )

        assert result.exit_code == 0
        assert "Row 2 of 'lookup' updated" in result.output

    def test_update_unknown_row(self, runner, cli_env):
        result = runner.invoke(
            cli,
            ["table", "update", "areas", "-s", "Nowhere", "-t", "Somewhere"],
        )

        assert result.exit_code == 3
        assert "not found in 'areas'" in result.output

    def test_delete(self, runner, cli_env):
        result = runner.invoke(
            cli, ["table", "delete", "areas", "-s", "ICF", "-s", "Area 1", "--yes"]
        )

        assert result.exit_code == 0
        assert "Row 3 of 'areas' deleted" in result.output
        listed = runner.invoke(cli, ["table", "list", "areas", "--search", "ICF"])
        assert "No rows found in areas." in listed.output

    def test_delete_cancelled(self, runner, cli_env):
        result = runner.invoke(
            cli, ["table", "delete", "areas", "-s", "ICF", "-s", "Area 1"], input="n\n"
        )

        assert result.exit_code == 130
        listed = runner.invoke(cli, ["table", "list", "areas", "--search", "ICF"])
        assert "1 row(s)" in listed.output
