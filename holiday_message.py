#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Group fetched holidays by location and turn them into a Slack message.
"""

from typing import Dict, List, Optional, Sequence, Tuple

from holiday_sources import Holiday
from slack_blocks import (
    HeaderBlock,
    Message,
    RichText,
    RichTextBlock,
    RichTextList,
    RichTextSection,
    SectionBlock,
)

HEADER_TEXT = ":calendar: Holidays"


def group_by_location(holidays: Sequence[Holiday]) -> List[Tuple[str, List[Holiday]]]:
    """
    Group holidays by location, sorted by location name.

    Holidays without a location are dropped. Order within a group is the
    order the holidays were received in.

    Args:
        holidays: Holidays from all countries, in fetch order

    Returns:
        List of (location, holidays) tuples
    """
    groups: Dict[str, List[Holiday]] = {}
    for holiday in holidays:
        if holiday.location is None:
            continue
        groups.setdefault(holiday.location, []).append(holiday)
    return sorted(groups.items(), key=lambda item: item[0])


def holiday_line(holiday: Holiday) -> RichTextSection:
    primary, secondary = holiday.display_names()
    elements = [RichText(primary, bold=True)]
    if secondary:
        elements.append(RichText(f" ({secondary})", italic=True))
    return RichTextSection(tuple(elements))


def build_message(holidays: Sequence[Holiday]) -> Optional[Message]:
    """
    Build the Slack message for a list of holidays.

    Returns:
        The message, or None when there are no holidays to announce
    """
    if not holidays:
        return None

    blocks: List[object] = [HeaderBlock(HEADER_TEXT)]
    for location, group in group_by_location(holidays):
        blocks.append(SectionBlock(f"_{location}_"))
        lines = tuple(holiday_line(h) for h in group)
        blocks.append(RichTextBlock((RichTextList(lines),)))

    return Message(tuple(blocks))
