from __future__ import annotations

import pytest

from helpers.factories import (
    PROMOTE_SUBTYPE,
    SCHEDULED_FIELD,
    SECOND_SCHEDULED_FIELD,
    article,
    field_metadata,
    make_validator,
    scheduled,
    subtype_store,
)
from moderation_schedule.core.entity import ContentRecord, ScheduledUpdate
from moderation_schedule.core.exceptions import UnknownBundleError
from moderation_schedule.core.schema import ScheduledUpdateFieldResolver
from moderation_schedule.core.subtypes import ModerationStateFieldResolver
from moderation_schedule.core.timeline import NOW, ScheduledTransitionCollector, TimelineEvent


def _collector(store=None) -> ScheduledTransitionCollector:
    return ScheduledTransitionCollector(
        ScheduledUpdateFieldResolver(field_metadata()),
        ModerationStateFieldResolver(store if store is not None else subtype_store()),
    )


def test_collects_events_in_discovery_order():
    entity = article(
        "draft",
        scheduled("published", 20),
        scheduled("review", 10),
        extra_fields={SECOND_SCHEDULED_FIELD: [scheduled("archived", 30)]},
    )

    events = _collector().get_scheduled_state_transitions(entity)

    assert events == [
        TimelineEvent(20, "published"),
        TimelineEvent(10, "review"),
        TimelineEvent(30, "archived"),
    ]
    assert [e.source for e in events] == [SCHEDULED_FIELD, SCHEDULED_FIELD, SECOND_SCHEDULED_FIELD]


def test_current_state_is_not_a_scheduled_transition():
    assert _collector().get_scheduled_state_transitions(article("draft")) == []


@pytest.mark.parametrize("empty", [None, "", False, 0])
def test_records_without_target_state_are_excluded(empty):
    record = ScheduledUpdate("moderation_state_change", 10, {"field_moderation_state": empty})
    entity = article("draft", record, scheduled("review", 20))

    events = _collector().get_scheduled_state_transitions(entity)

    assert events == [TimelineEvent(20, "review")]


def test_records_of_types_not_changing_state_are_excluded():
    promote = ScheduledUpdate(PROMOTE_SUBTYPE, 10, {"field_promote": True})
    entity = article("draft", promote)

    assert _collector().get_scheduled_state_transitions(entity) == []


def test_dangling_references_are_skipped():
    entity = article("draft", None, scheduled("review", 10))
    assert _collector().get_scheduled_state_transitions(entity) == [TimelineEvent(10, "review")]


def test_reference_fields_to_other_types_are_ignored():
    entity = article(
        "draft",
        extra_fields={"field_related": [scheduled("review", 10)]},
    )
    assert _collector().get_scheduled_state_transitions(entity) == []


def test_missing_timestamp_is_kept():
    entity = article("draft", scheduled("review", None))
    assert _collector().get_scheduled_state_transitions(entity) == [TimelineEvent(None, "review")]


def test_populates_the_state_field_cache():
    collector = _collector()
    collector.get_scheduled_state_transitions(
        article("draft", scheduled("review", 10), ScheduledUpdate(PROMOTE_SUBTYPE, 5))
    )
    assert collector.state_field_resolver.cache_info() == {
        "moderation_state_change": "field_moderation_state",
        PROMOTE_SUBTYPE: None,
    }


def test_unknown_bundle_propagates():
    entity = ContentRecord(id="1", entity_type_id="node", bundle="page")
    with pytest.raises(UnknownBundleError):
        _collector().get_scheduled_state_transitions(entity)


def test_build_timeline_starts_with_now():
    timeline = make_validator().build_timeline(
        article("draft", scheduled("published", 20), scheduled("review", 10))
    )
    assert [(e.time, e.state) for e in timeline] == [
        (NOW, "draft"),
        (10, "review"),
        (20, "published"),
    ]


def test_build_timeline_without_current_state():
    timeline = make_validator().build_timeline(article(None, scheduled("review", 10)))
    assert timeline == [TimelineEvent(10, "review")]
