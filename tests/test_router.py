"""Tests for bot/router.py: routing messages and callback queries."""

import pytest

from sagiri.bot.router import process_callback, process_message, process_update
from sagiri.errors import InvalidMessageError, StaleInteractionError
from sagiri.models.events import CallbackEvent, IncomingMessage, MessageRef

CHAT_ID = 500
MESSAGE_ID = 77


def _query(data, sender_id=1001, message=MessageRef(message_id=MESSAGE_ID, chat_id=CHAT_ID)):
    return CallbackEvent(callback_id="cb-1", sender_id=sender_id, message=message, data=data)


# ---------------------------------------------------------------------------
# Messages
# ---------------------------------------------------------------------------

class TestProcessMessage:
    @pytest.mark.asyncio
    async def test_list_from_registered_sender(self, ctx, telegram, kitsu):
        await process_message(ctx, IncomingMessage(chat_id=CHAT_ID, sender_id=1001, text="list"))

        kitsu.fetch_entries.assert_awaited_once_with(42, 0)
        sent = telegram.send_message.await_args
        assert sent.kwargs["parse_mode"] == "HTML"
        assert len(sent.kwargs["keyboard"]) > 0

    @pytest.mark.asyncio
    async def test_list_from_unregistered_sender(self, ctx, telegram, kitsu):
        await process_message(ctx, IncomingMessage(chat_id=CHAT_ID, sender_id=31337, text="list"))

        telegram.send_message.assert_awaited_once_with(CHAT_ID, "Non-registered user: 31337")
        kitsu.fetch_entries.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update(self, ctx, telegram):
        await process_message(ctx, IncomingMessage(chat_id=CHAT_ID, sender_id=1001, text="update"))

        assert "Successful update: 2 user(s)" in telegram.send_message.await_args.args[1]

    @pytest.mark.asyncio
    async def test_version(self, ctx, telegram):
        await process_message(ctx, IncomingMessage(chat_id=CHAT_ID, sender_id=1001, text="version"))

        assert "Sagiri-" in telegram.send_message.await_args.args[1]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["frobnicate", "", None, "LIST"])
    async def test_unrecognized_text_gets_notice(self, ctx, telegram, kitsu, text):
        await process_message(ctx, IncomingMessage(chat_id=CHAT_ID, sender_id=1001, text=text))

        telegram.send_message.assert_awaited_once_with(CHAT_ID, "Unknown command.")
        kitsu.fetch_entries.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("chat_id,sender_id", [(None, 1001), (CHAT_ID, None)])
    async def test_missing_chat_or_sender(self, ctx, telegram, chat_id, sender_id):
        with pytest.raises(InvalidMessageError):
            await process_message(ctx, IncomingMessage(chat_id=chat_id, sender_id=sender_id, text="list"))
        telegram.send_message.assert_not_awaited()


# ---------------------------------------------------------------------------
# Callback queries
# ---------------------------------------------------------------------------

class TestProcessCallback:
    @pytest.mark.asyncio
    async def test_offset(self, ctx, telegram, kitsu):
        await process_callback(ctx, _query("/7/offset/3/"))

        kitsu.fetch_entries.assert_awaited_once_with(7, 3)
        assert [c[0] for c in telegram.mock_calls] == ["edit_inline_keyboard", "answer_callback"]
        assert telegram.edit_inline_keyboard.await_args.args[:2] == (MESSAGE_ID, CHAT_ID)

    @pytest.mark.asyncio
    async def test_detail(self, ctx, kitsu):
        await process_callback(ctx, _query("/42/detail/12/"))

        kitsu.get_entry_detail.assert_awaited_once_with(42, 12)

    @pytest.mark.asyncio
    async def test_progress_without_token(self, ctx, telegram, kitsu):
        await process_callback(ctx, _query("/7/progress/abc/xyz/5/", sender_id=31337))

        telegram.answer_callback.assert_awaited_once_with(
            "cb-1", text="Non-registered user", show_alert=True
        )
        telegram.edit_inline_keyboard.assert_not_awaited()
        kitsu.update_entry_progress.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_progress_passes_sender_and_ids(self, ctx, kitsu):
        await process_callback(ctx, _query("/42/progress/12/555/4/"))

        kitsu.update_entry_progress.assert_awaited_once_with("tok-1001", "555", 4, "12")

    @pytest.mark.asyncio
    async def test_stale_callback_is_not_parsed(self, ctx, telegram, monkeypatch):
        def fail(_):
            raise AssertionError("payload must not be parsed")

        monkeypatch.setattr("sagiri.bot.router.parse_query_command", fail)

        with pytest.raises(StaleInteractionError):
            await process_callback(ctx, _query("/7/offset/3/", message=None))
        assert telegram.mock_calls == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("data", ["/7/page/3/", "", None, "/7/offset/x/"])
    async def test_unparseable_payload(self, ctx, telegram, kitsu, data):
        await process_callback(ctx, _query(data))

        telegram.send_message.assert_awaited_once_with(CHAT_ID, "Unknown command.")
        telegram.answer_callback.assert_awaited_once_with("cb-1")
        kitsu.fetch_entries.assert_not_awaited()


# ---------------------------------------------------------------------------
# Raw updates
# ---------------------------------------------------------------------------

class TestProcessUpdate:
    @pytest.mark.asyncio
    async def test_message_update(self, ctx, telegram):
        update = {
            "update_id": 1,
            "message": {
                "message_id": 10,
                "from": {"id": 1001, "is_bot": False, "first_name": "N"},
                "chat": {"id": CHAT_ID, "type": "private"},
                "text": "version",
            },
        }
        assert await process_update(ctx, update) is True
        telegram.send_message.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_callback_update(self, ctx, kitsu):
        update = {
            "update_id": 2,
            "callback_query": {
                "id": "4382bfdwdsb323b2d9",
                "from": {"id": 1001, "is_bot": False, "first_name": "N"},
                "message": {"message_id": MESSAGE_ID, "chat": {"id": CHAT_ID, "type": "private"}},
                "data": "/42/offset/1/",
            },
        }
        assert await process_update(ctx, update) is True
        kitsu.fetch_entries.assert_awaited_once_with(42, 1)

    @pytest.mark.asyncio
    async def test_other_update_is_ignored(self, ctx, telegram):
        assert await process_update(ctx, {"update_id": 3, "edited_message": {}}) is False
        assert telegram.mock_calls == []
