#!/usr/bin/env python3
"""
AWS Lambda entry point for the Sagiri Telegram webhook.

API Gateway forwards each Telegram update as the request body. The update is
decoded, routed to the matching command handler and acknowledged with a 200
response, including when the update is rejected, so Telegram does not
redeliver it.

Required Environment Variables:
    - TELEGRAM_BOT_TOKEN: Telegram bot token
    - DB_HOST, DB_NAME, DB_USER, DB_PASSWORD: User database
    - KITSU_API_BASE: Kitsu API base URL (optional)
    - KITSU_PAGE_SIZE: Entries per watch list page (optional, defaults to 10)
"""

import asyncio
import json
import logging
import sys
from typing import Any, Dict, Optional

from sagiri.bot import BotContext, process_update
from sagiri.config import config
from sagiri.errors import SagiriError
from sagiri.services import KitsuApi, TelegramClient, UserStore

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    stream=sys.stdout,
    force=True,
    datefmt="%Y-%m-%d %H:%M:%S",
)

logger = logging.getLogger(__name__)

# Kept across warm invocations; filled on the first one
_users: Optional[UserStore] = None


def _response(status_code: int, body: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "statusCode": status_code,
        "headers": {
            "Content-Type": "application/json"
        },
        "body": json.dumps(body),
    }


async def _get_context() -> BotContext:
    """
    Build the bot collaborators for one invocation.

    The user store is loaded once per Lambda container. The HTTP clients are
    created per invocation because each one runs in a fresh event loop.
    """
    global _users
    if _users is None:
        config.validate()
        users = UserStore()
        await users.refresh_all()
        _users = users
    return BotContext(
        telegram=TelegramClient(config.TELEGRAM_BOT_TOKEN),
        kitsu=KitsuApi(
            config.KITSU_API_BASE,
            page_size=config.KITSU_PAGE_SIZE,
            timeout=config.KITSU_TIMEOUT_SECONDS,
        ),
        users=_users,
    )


async def handle_update_async(update: Dict[str, Any]) -> bool:
    """
    Route one Telegram update.

    Returns:
        True if the update was handled, False if it was ignored or rejected
    """
    ctx: Optional[BotContext] = None
    try:
        ctx = await _get_context()
        return await process_update(ctx, update)
    except SagiriError as e:
        logger.warning(f"Update {update.get('update_id')} not handled: {e}")
        return False
    finally:
        if ctx is not None:
            await ctx.telegram.close()


def handle_webhook_update(event: Dict[str, Any]) -> Dict[str, Any]:
    """
    Handle webhook update from API Gateway.

    Args:
        event: API Gateway event object

    Returns:
        API Gateway response dictionary
    """
    try:
        # API Gateway sends the body as a JSON string at top level
        body = event.get("body") or event.get("requestContext", {}).get("body", "{}")
        if isinstance(body, str):
            update = json.loads(body)
        else:
            update = body
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse webhook body: {e}")
        return _response(400, {"ok": False, "error": "Invalid JSON in request body"})

    if not isinstance(update, dict):
        logger.warning("Webhook body is not a Telegram update object")
        return _response(400, {"ok": False, "error": "Invalid update"})

    try:
        handled = asyncio.run(handle_update_async(update))
    except Exception as e:
        logger.exception(f"Error handling webhook update: {e}")
        return _response(200, {"ok": False, "error": str(e)})

    return _response(200, {
        "ok": handled,
        "message": "Update processed" if handled else "Update ignored",
    })


def lambda_handler(event, context):
    logger.info("Received webhook event")
    return handle_webhook_update(event)
