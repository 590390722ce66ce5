"""Tests for the webhook entry point."""

import json
import logging
from unittest.mock import AsyncMock

import pytest

import aws_lambda
from sagiri.errors import StoreError


def _event(update):
    return {
        "httpMethod": "POST",
        "path": "/webhook",
        "body": json.dumps(update),
        "requestContext": {"path": "/webhook", "requestId": "test-request-id", "httpMethod": "POST"},
    }


MESSAGE_UPDATE = {
    "update_id": 788190251,
    "message": {
        "message_id": 1333,
        "from": {"id": 1001, "is_bot": False, "first_name": "N"},
        "chat": {"id": 427988146, "type": "private"},
        "date": 1633935457,
        "text": "list",
    },
}


@pytest.fixture
def webhook_ctx(ctx, monkeypatch):
    monkeypatch.setattr(aws_lambda, "_get_context", AsyncMock(return_value=ctx))
    return ctx


def test_message_is_routed(webhook_ctx, kitsu, telegram):
    result = aws_lambda.lambda_handler(_event(MESSAGE_UPDATE), {})

    assert result["statusCode"] == 200
    assert json.loads(result["body"])["ok"] is True
    kitsu.fetch_entries.assert_awaited_once_with(42, 0)
    telegram.send_message.assert_awaited_once()
    telegram.close.assert_awaited_once()


def test_stale_callback_is_acknowledged_to_telegram(webhook_ctx, telegram):
    update = {"update_id": 1, "callback_query": {"id": "q", "from": {"id": 1001}, "data": "/42/offset/0/"}}

    result = aws_lambda.lambda_handler(_event(update), {})

    assert result["statusCode"] == 200
    assert json.loads(result["body"])["ok"] is False
    telegram.send_message.assert_not_awaited()
    telegram.edit_inline_keyboard.assert_not_awaited()
    telegram.answer_callback.assert_not_awaited()


def test_ignored_update(webhook_ctx):
    result = aws_lambda.lambda_handler(_event({"update_id": 2, "poll": {}}), {})

    assert result["statusCode"] == 200
    assert json.loads(result["body"]) == {"ok": False, "message": "Update ignored"}


def test_invalid_json(webhook_ctx):
    result = aws_lambda.lambda_handler({"httpMethod": "POST", "body": "{not json"}, {})

    assert result["statusCode"] == 400


def test_body_must_be_an_object(webhook_ctx):
    result = aws_lambda.lambda_handler({"httpMethod": "POST", "body": "[1, 2]"}, {})

    assert result["statusCode"] == 400


def test_collaborator_failure_is_reported(webhook_ctx, kitsu):
    kitsu.fetch_entries.side_effect = StoreError("db down")

    result = aws_lambda.lambda_handler(_event(MESSAGE_UPDATE), {})

    assert result["statusCode"] == 200
    assert json.loads(result["body"])["ok"] is False


def test_unexpected_error_is_reported(webhook_ctx, kitsu):
    kitsu.fetch_entries.side_effect = RuntimeError("bug")

    result = aws_lambda.lambda_handler(_event(MESSAGE_UPDATE), {})

    assert result["statusCode"] == 200
    assert json.loads(result["body"]) == {"ok": False, "error": "bug"}


def test_telegram_client_closed_after_failure(webhook_ctx, kitsu, telegram):
    kitsu.fetch_entries.side_effect = RuntimeError("bug")

    aws_lambda.lambda_handler(_event(MESSAGE_UPDATE), {})

    telegram.close.assert_awaited_once()


def test_store_failure_while_building_context(monkeypatch, caplog):
    monkeypatch.setattr(aws_lambda, "_get_context", AsyncMock(side_effect=StoreError("db down")))

    with caplog.at_level(logging.WARNING, logger="aws_lambda"):
        result = aws_lambda.lambda_handler(_event(MESSAGE_UPDATE), {})

    assert result["statusCode"] == 200
    assert json.loads(result["body"]) == {"ok": False, "message": "Update ignored"}
    records = [r for r in caplog.records if r.name == "aws_lambda"]
    assert [r.levelno for r in records if "db down" in r.getMessage()] == [logging.WARNING]
