import pytest
import snowflake.connector.errors

from snowmonitor.emulator.statements import (
    AlterMonitor,
    CreateMonitor,
    DropMonitor,
    ShowMonitors,
    parse_statement,
    split_words,
)
from snowmonitor.resource_monitors import TriggerAction, TriggerDefinition


def test_split_words_keeps_quoted_text():
    words = split_words("drop resource monitor \"My Monitor\"")

    assert [w.text for w in words] == ["DROP", "RESOURCE", "MONITOR", "My Monitor"]
    assert words[-1].quoted


def test_parse_create_with_everything():
    statement = parse_statement(
        'CREATE OR REPLACE RESOURCE MONITOR "RM" WITH CREDIT_QUOTA = 100 FREQUENCY = MONTHLY '
        "START_TIMESTAMP = 'IMMEDIATELY' END_TIMESTAMP = '2030-01-01 00:00:00' "
        'NOTIFY_USERS = ("A", "B") TRIGGERS ON 50 PERCENT DO SUSPEND_IMMEDIATE ON 100 PERCENT DO NOTIFY'
    )

    assert isinstance(statement, CreateMonitor)
    assert statement.name == "RM"
    assert statement.or_replace is True
    parameters = statement.parameters
    assert parameters.credit_quota == "100"
    assert parameters.frequency == "MONTHLY"
    assert parameters.start_timestamp == "IMMEDIATELY"
    assert parameters.end_timestamp == "2030-01-01 00:00:00"
    assert parameters.notify_users == ["A", "B"]
    assert parameters.triggers == [
        TriggerDefinition(threshold=50, trigger_action=TriggerAction.SUSPEND_IMMEDIATE),
        TriggerDefinition(threshold=100, trigger_action=TriggerAction.NOTIFY),
    ]


def test_parse_create_with_bare_with():
    statement = parse_statement('CREATE RESOURCE MONITOR "RM" WITH')

    assert statement == CreateMonitor(name="RM")


def test_parse_unquoted_name_is_upper_cased():
    assert parse_statement("drop resource monitor rm") == DropMonitor(name="RM")


def test_parse_alter():
    statement = parse_statement(
        'ALTER RESOURCE MONITOR IF EXISTS "RM" SET CREDIT_QUOTA = 5 NOTIFY_USERS = ("A")'
    )

    assert isinstance(statement, AlterMonitor)
    assert statement.if_exists is True
    assert statement.parameters.credit_quota == "5"
    assert statement.parameters.notify_users == ["A"]
    assert statement.parameters.triggers is None


@pytest.mark.parametrize(
    "sql, pattern",
    [("SHOW RESOURCE MONITORS", None), ("SHOW RESOURCE MONITORS LIKE 'RM%'", "RM%")],
)
def test_parse_show(sql, pattern):
    assert parse_statement(sql) == ShowMonitors(pattern=pattern)


@pytest.mark.parametrize(
    "sql",
    [
        "",
        "SELECT 1",
        "CREATE TABLE t (a INT)",
        "DROP RESOURCE MONITOR",
        'CREATE RESOURCE MONITOR "RM" WITH COLOR = RED',
        'CREATE RESOURCE MONITOR "RM" WITH TRIGGERS ON 50 PERCENT DO EXPLODE',
        'CREATE RESOURCE MONITOR "RM" WITH NOTIFY_USERS = ("A" "B")',
        "SHOW RESOURCE MONITORS LIKE RM",
        'DROP RESOURCE MONITOR "RM" CASCADE',
    ],
)
def test_parse_rejects_other_statements(sql):
    with pytest.raises(snowflake.connector.errors.ProgrammingError) as exc_info:
        parse_statement(sql)

    assert exc_info.value.errno == 1003
    assert exc_info.value.sqlstate == "42000"
