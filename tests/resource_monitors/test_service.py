import logging

import pytest
import snowflake.connector.errors

from snowmonitor import AccountObjectIdentifier, Like
from snowmonitor.errors import DecodeError, InvalidEnumError, InvalidObjectIdentifierError, NotFoundError, ValidationError
from snowmonitor.resource_monitors import (
    AlterResourceMonitorOptions,
    CreateResourceMonitorOptions,
    Frequency,
    ResourceMonitors,
    ResourceMonitorSet,
    ShowResourceMonitorOptions,
    TriggerAction,
    TriggerDefinition,
)


def test_create_without_options(recording_client, monitor_id):
    ResourceMonitors(recording_client).create(monitor_id)

    assert recording_client.statements == ['CREATE RESOURCE MONITOR "MONTHLY_CAP" WITH']


def test_create_with_empty_options_keeps_or_replace(recording_client, monitor_id):
    ResourceMonitors(recording_client).create(monitor_id, CreateResourceMonitorOptions(or_replace=True))

    assert recording_client.statements == ['CREATE OR REPLACE RESOURCE MONITOR "MONTHLY_CAP" WITH']


def test_create_with_parameters(recording_client, monitor_id):
    opts = CreateResourceMonitorOptions(
        credit_quota=100,
        frequency=Frequency.MONTHLY,
        triggers=[
            TriggerDefinition(threshold=50, trigger_action=TriggerAction.SUSPEND_IMMEDIATE),
            TriggerDefinition(threshold=100, trigger_action=TriggerAction.NOTIFY),
        ],
    )

    ResourceMonitors(recording_client).create(monitor_id, opts)

    assert recording_client.statements == [
        'CREATE RESOURCE MONITOR "MONTHLY_CAP" WITH CREDIT_QUOTA = 100 FREQUENCY = MONTHLY '
        "TRIGGERS ON 50 PERCENT DO SUSPEND_IMMEDIATE ON 100 PERCENT DO NOTIFY"
    ]
    assert opts.name is None


def test_create_injects_name_over_options(recording_client, monitor_id):
    opts = CreateResourceMonitorOptions(name=AccountObjectIdentifier("OTHER"), credit_quota=1)

    ResourceMonitors(recording_client).create(monitor_id, opts)

    assert recording_client.statements == ['CREATE RESOURCE MONITOR "MONTHLY_CAP" WITH CREDIT_QUOTA = 1']


@pytest.mark.parametrize("name", ["", "X" * 256])
def test_invalid_identifier_short_circuits(recording_client, name):
    monitors = ResourceMonitors(recording_client)
    bad_id = AccountObjectIdentifier(name)

    with pytest.raises(InvalidObjectIdentifierError):
        monitors.create(bad_id)
    with pytest.raises(InvalidObjectIdentifierError):
        monitors.alter(bad_id)
    with pytest.raises(InvalidObjectIdentifierError):
        monitors.drop(bad_id)

    assert recording_client.statements == []


def test_alter(recording_client, monitor_id):
    opts = AlterResourceMonitorOptions(if_exists=True, set=ResourceMonitorSet(credit_quota=25))

    ResourceMonitors(recording_client).alter(monitor_id, opts)

    assert recording_client.statements == [
        'ALTER RESOURCE MONITOR IF EXISTS "MONTHLY_CAP" SET CREDIT_QUOTA = 25'
    ]


def test_alter_unpaired_frequency_is_rejected(recording_client, monitor_id, caplog):
    opts = AlterResourceMonitorOptions(set=ResourceMonitorSet(frequency=Frequency.DAILY))

    with caplog.at_level(logging.DEBUG, logger="snowmonitor"):
        with pytest.raises(ValidationError):
            ResourceMonitors(recording_client).alter(monitor_id, opts)

    assert recording_client.statements == []
    assert "AlterResourceMonitorOptions" in caplog.text


def test_drop(recording_client, monitor_id):
    ResourceMonitors(recording_client).drop(monitor_id)

    assert recording_client.statements == ['DROP RESOURCE MONITOR "MONTHLY_CAP"']


def test_show_decodes_every_row(recording_client):
    recording_client.rows = [
        {"name": "A", "credit_quota": "10.00", "frequency": "DAILY", "notify_users": "X, Y"},
        {"name": "B", "suspend_at": "100%", "level": "ACCOUNT"},
    ]

    monitors = ResourceMonitors(recording_client).show()

    assert recording_client.statements == ["SHOW RESOURCE MONITORS"]
    assert [m.name for m in monitors] == ["A", "B"]
    assert monitors[0].notify_users == ("X", "Y")
    assert monitors[1].set_for_account is True


def test_show_with_like(recording_client):
    ResourceMonitors(recording_client).show(ShowResourceMonitorOptions(like=Like(pattern="A%")))

    assert recording_client.statements == ["SHOW RESOURCE MONITORS LIKE 'A%'"]


@pytest.mark.parametrize(
    "bad_row, error",
    [
        ({"name": "B", "frequency": "FORTNIGHTLY"}, InvalidEnumError),
        ({"name": "B", "notify_at": "ten%"}, DecodeError),
        ({"name": "B", "credit_quota": "lots"}, DecodeError),
    ],
)
def test_show_aborts_on_first_bad_row(recording_client, bad_row, error):
    recording_client.rows = [{"name": "A"}, bad_row, {"name": "C"}]

    with pytest.raises(error):
        ResourceMonitors(recording_client).show()


def test_show_by_id_returns_exact_match(recording_client, monitor_id):
    recording_client.rows = [{"name": "MONTHLY_CAP_OLD"}, {"name": "MONTHLY_CAP", "credit_quota": "5"}]

    monitor = ResourceMonitors(recording_client).show_by_id(monitor_id)

    assert recording_client.statements == ["SHOW RESOURCE MONITORS LIKE 'MONTHLY_CAP'"]
    assert monitor.name == "MONTHLY_CAP"


def test_show_by_id_without_exact_match(recording_client, monitor_id):
    recording_client.rows = [{"name": "MONTHLY_CAP_OLD"}, {"name": "monthly_cap"}, {"name": "MONTHLYXCAP"}]

    with pytest.raises(NotFoundError):
        ResourceMonitors(recording_client).show_by_id(monitor_id)


def test_show_by_id_with_no_rows(recording_client, monitor_id):
    with pytest.raises(NotFoundError):
        ResourceMonitors(recording_client).show_by_id(monitor_id)


def test_transport_errors_pass_through(recording_client, monitor_id):
    error = snowflake.connector.errors.ProgrammingError(msg="boom", errno=1003, sqlstate="42000")

    def failing_exec(sql):
        raise error

    recording_client.exec = failing_exec

    with pytest.raises(snowflake.connector.errors.ProgrammingError) as exc_info:
        ResourceMonitors(recording_client).drop(monitor_id)

    assert exc_info.value is error
