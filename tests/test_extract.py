"""Tests for due-date parsing and action-item drafting."""

from datetime import timedelta

import pytest

from rulebot.agent.extract import (
    default_priority,
    draft_action_items,
    extract_due_date,
    has_urgent_vocabulary,
    is_urgent_timeframe,
)
from rulebot.types import TaskPriority

from conftest import NOW

HIGH, MEDIUM, LOW = TaskPriority.HIGH, TaskPriority.MEDIUM, TaskPriority.LOW


# ============================================================================
# Due dates
# ============================================================================


@pytest.mark.parametrize("text", ["finish it today", "dinner tonight", "call this evening"])
def test_same_day_phrases_mean_six_pm(text):
    assert extract_due_date(text, NOW) == NOW.replace(hour=18, minute=0)


@pytest.mark.parametrize("text", ["meeting tomorrow at 10am", "do it the next day"])
def test_next_day_phrases_mean_a_day_from_now(text):
    assert extract_due_date(text, NOW) == NOW + timedelta(hours=24)


def test_clock_time_later_today():
    assert extract_due_date("call the bank at 2pm", NOW) == NOW.replace(hour=14)


def test_clock_time_with_minutes():
    assert extract_due_date("submit by 11:30am", NOW) == NOW.replace(hour=11, minute=30)


def test_clock_time_already_past_rolls_to_tomorrow():
    assert extract_due_date("standup at 8am", NOW) == NOW.replace(hour=8) + timedelta(days=1)


def test_clock_time_equal_to_now_rolls_to_tomorrow():
    assert extract_due_date("sync at 9am", NOW) == NOW + timedelta(days=1)


def test_twelve_am_and_pm():
    assert extract_due_date("lunch at 12pm", NOW) == NOW.replace(hour=12)
    assert extract_due_date("deploy before 12am", NOW) == NOW.replace(hour=0) + timedelta(days=1)


def test_twenty_four_hour_clock():
    assert extract_due_date("review at 16:45", NOW) == NOW.replace(hour=16, minute=45)


def test_in_n_hours():
    assert extract_due_date("flight in 3 hours", NOW) == NOW + timedelta(hours=3)
    assert extract_due_date("leave in 1 hour", NOW) == NOW + timedelta(hours=1)


@pytest.mark.parametrize("text", ["finish in 99999999 hours", "leave in 99999999999999999999 hours"])
def test_out_of_range_hour_count_has_no_due_date(text):
    assert extract_due_date(text, NOW) is None


def test_out_of_range_hour_count_still_drafts_an_item():
    [item] = draft_action_items("Follow this guideline.", "finish in 99999999 hours", NOW)

    assert item.priority == TaskPriority.HIGH
    assert item.due_date == NOW + timedelta(hours=24)


@pytest.mark.parametrize("text", ["buy milk", "at 25:00", "at 13pm", "sometime next week"])
def test_unparseable_text_has_no_due_date(text):
    assert extract_due_date(text, NOW) is None


# ============================================================================
# Urgency
# ============================================================================


@pytest.mark.parametrize("text", ["URGENT fix", "emergency", "asap please", "critical bug", "reply immediately"])
def test_urgent_vocabulary(text):
    assert has_urgent_vocabulary(text)


def test_important_is_not_urgent_vocabulary():
    assert not has_urgent_vocabulary("important meeting")


@pytest.mark.parametrize("text", [
    "finish today",
    "in 2 hours",
    "within the hour",
    "by 5:00",
    "before 6",
    "report due today",
])
def test_urgent_timeframe(text):
    assert is_urgent_timeframe(text)


def test_relaxed_timeframe_is_not_urgent():
    assert not is_urgent_timeframe("meeting tomorrow")


def test_default_priority_order():
    assert default_priority("anything", NOW + timedelta(hours=5), NOW) == HIGH
    assert default_priority("critical thing", None, NOW) == HIGH
    assert default_priority("important thing", NOW + timedelta(days=3), NOW) == HIGH
    assert default_priority("client call", None, NOW) == MEDIUM
    assert default_priority("water the plants", None, NOW) == LOW


# ============================================================================
# Drafting
# ============================================================================


def test_each_action_verb_drafts_an_item_with_its_offset():
    response = "Please reschedule, cancel the gym and verify the plan."

    items = draft_action_items(response, "water plants", NOW)

    assert [(i.content, i.due_date - NOW, i.priority) for i in items] == [
        ("Reschedule conflicting appointment", timedelta(hours=2), MEDIUM),
        ("Cancel lower priority activity", timedelta(hours=1), MEDIUM),
        ("Verify schedule and requirements", timedelta(hours=4), MEDIUM),
    ]


def test_no_action_verb_drafts_handle_item():
    items = draft_action_items("Follow this guideline.", "water the plants", NOW)

    assert len(items) == 1
    assert items[0].content == "Handle: water the plants"
    assert items[0].priority == LOW
    assert items[0].due_date == NOW + timedelta(hours=24)


def test_handle_item_for_client_meeting_is_medium():
    items = draft_action_items("Follow this guideline.", "prepare client meeting notes", NOW)
    assert items[0].priority == MEDIUM


def test_extracted_due_date_overrides_default_offsets():
    items = draft_action_items("Check and cancel.", "dentist tomorrow", NOW)

    assert len(items) == 2
    assert all(i.due_date == NOW + timedelta(hours=24) for i in items)
    assert all(i.priority == MEDIUM for i in items)


def test_urgent_vocabulary_forces_high_and_thirty_minutes():
    items = draft_action_items(
        "Reschedule and verify everything.",
        "urgent deadline for project due today",
        NOW,
    )

    assert len(items) == 2
    for item in items:
        assert item.priority == HIGH
        assert item.due_date == NOW + timedelta(minutes=30)


def test_urgent_vocabulary_applies_to_handle_item():
    items = draft_action_items("Follow this guideline.", "urgent deadline for project due today", NOW)

    assert len(items) == 1
    assert items[0].priority == HIGH
    assert items[0].due_date == NOW + timedelta(minutes=30)


def test_same_day_timeframe_forces_high_keeping_due_date():
    items = draft_action_items("Verify the schedule.", "dentist this evening", NOW)

    assert items[0].priority == HIGH
    assert items[0].due_date == NOW.replace(hour=18)


def test_in_hours_timeframe_forces_high():
    items = draft_action_items("Follow this guideline.", "pick up parcel in 2 hours", NOW)

    assert items[0].priority == HIGH
    assert items[0].due_date == NOW + timedelta(hours=2)
