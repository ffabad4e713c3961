"""Tests for Graph client setup and error notification formatting."""

import asyncio

import pytest

from core import graph_client
from services import email
from services.email import format_error_body


def test_error_body_lists_responses():
    try:
        raise LookupError("Calendar 'GET Bus' not found")
    except LookupError as e:
        body = format_error_body(e, ["Have a run", "1203", "Tomorrow"])

    assert "  1. Have a run" in body
    assert "  2. 1203" in body
    assert "  3. Tomorrow" in body
    assert "Error: Calendar 'GET Bus' not found" in body
    assert "Traceback" in body


def test_graph_client_requires_credentials(monkeypatch):
    monkeypatch.setattr(graph_client, "_graph_client", None)
    monkeypatch.setattr(graph_client, "GRAPH_TENANT_ID", "tenant")
    monkeypatch.setattr(graph_client, "GRAPH_APP_ID", "")
    monkeypatch.setattr(graph_client, "GRAPH_CLIENT_SECRET", "")

    with pytest.raises(RuntimeError) as excinfo:
        graph_client.get_graph_client()

    message = str(excinfo.value)
    assert "MICROSOFT_GRAPH_APP_ID" in message
    assert "MICROSOFT_GRAPH_CLIENT_SECRET" in message
    assert "MICROSOFT_GRAPH_TENANT_ID" not in message


def test_error_email_without_credentials_does_not_raise(monkeypatch, capsys):
    def missing_credentials():
        raise RuntimeError("Missing MS Graph credentials: MICROSOFT_GRAPH_APP_ID")

    monkeypatch.setattr(email, "get_graph_client", missing_credentials)

    error = LookupError("Calendar 'GET Bus' not found")
    asyncio.run(email.send_error_email(error, ["Day off!", "Today"]))

    assert "Failed to send error email: Missing MS Graph credentials" in capsys.readouterr().out
