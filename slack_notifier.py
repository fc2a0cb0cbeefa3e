#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Post a holiday message to a Slack incoming webhook.
"""

import sys
from typing import Any, Callable, Dict, Optional, Tuple

from http_client import http_post_json
from slack_blocks import Message

PostJson = Callable[[str, Dict[str, Any]], Tuple[int, str]]


class SlackWebhookError(RuntimeError):
    """The webhook request failed or returned an error status."""


def send_to_slack(
    webhook_url: str,
    message: Optional[Message],
    post_json: PostJson = http_post_json,
) -> bool:
    """
    Send a message to Slack.

    Args:
        webhook_url: Slack incoming webhook URL
        message: Message to send; None means there is nothing to announce
        post_json: HTTP POST function returning (status, body)

    Returns:
        True if a message was sent, False if there was nothing to send

    Raises:
        SlackWebhookError: If the request fails or Slack answers with status >= 400
    """
    if message is None:
        return False

    try:
        status, body = post_json(webhook_url, message.to_dict())
    except RuntimeError as e:
        print(f"ERROR: slack request failed: {e}", file=sys.stderr)
        print(f"request\n{message.to_json(indent=2)}\n", file=sys.stderr)
        raise SlackWebhookError("request to Slack API failed") from e

    if status >= 400:
        print(f"ERROR: slack request failed (status {status})", file=sys.stderr)
        print(f"request\n{message.to_json(indent=2)}\n", file=sys.stderr)
        print(f"response\n{body}\n", file=sys.stderr)
        raise SlackWebhookError(f"request to Slack API failed with status {status}")

    return True
