#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Slack Block Kit message tree.

Only the block types the notifier sends are modelled. Every node serializes
itself with to_dict(); Message.to_json() produces the webhook body.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class RichText:
    text: str
    bold: bool = False
    italic: bool = False

    def to_dict(self) -> Dict[str, Any]:
        element: Dict[str, Any] = {"type": "text", "text": self.text}
        style = {}
        if self.bold:
            style["bold"] = True
        if self.italic:
            style["italic"] = True
        if style:
            element["style"] = style
        return element


@dataclass(frozen=True)
class RichTextSection:
    elements: Tuple[RichText, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "rich_text_section",
            "elements": [e.to_dict() for e in self.elements],
        }


@dataclass(frozen=True)
class RichTextList:
    items: Tuple[RichTextSection, ...]
    style: str = "bullet"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "rich_text_list",
            "style": self.style,
            "elements": [item.to_dict() for item in self.items],
        }


@dataclass(frozen=True)
class HeaderBlock:
    text: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "header",
            "text": {"type": "plain_text", "text": self.text, "emoji": True},
        }


@dataclass(frozen=True)
class SectionBlock:
    markdown: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "section",
            "text": {"type": "mrkdwn", "text": self.markdown},
        }


@dataclass(frozen=True)
class RichTextBlock:
    elements: Tuple[RichTextList, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "rich_text",
            "elements": [e.to_dict() for e in self.elements],
        }


@dataclass(frozen=True)
class Message:
    blocks: Tuple[Any, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {"blocks": [block.to_dict() for block in self.blocks]}

    def to_json(self, indent=None) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=indent)
