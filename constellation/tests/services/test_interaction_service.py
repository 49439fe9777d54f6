import pytest

from constellation.core.errors import NotFound, ValidationFailed
from constellation.services.interaction_service import InteractionService
from constellation.tests.factories import make_action


def test_interested_toggle_adds_then_removes(store):
    store.add_action(make_action())
    svc = InteractionService()

    first = svc.toggle(store, action_id="act-1", user_id="u1", type_="interested")
    assert first.active is True
    assert first.summary["interested"] == 1
    assert first.interested_ids == ["act-1"]

    second = svc.toggle(store, action_id="act-1", user_id="u1", type_="interested")
    assert second.active is False
    assert second.summary["interested"] == 0
    assert second.interested_ids == []


def test_support_toggle_leaves_other_counts_alone(store):
    store.add_action(make_action())
    svc = InteractionService()
    svc.toggle(store, action_id="act-1", user_id="u1", type_="meaningful")
    svc.toggle(store, action_id="act-1", user_id="u2", type_="interested")

    result = svc.toggle(store, action_id="act-1", user_id="u1", type_="support")

    assert result.summary == {"support": 1, "meaningful": 1, "interested": 1}


def test_interested_ids_span_all_actions(store):
    store.add_action(make_action("a1"))
    store.add_action(make_action("a2"))
    svc = InteractionService()
    svc.toggle(store, action_id="a1", user_id="u1", type_="interested")
    result = svc.toggle(store, action_id="a2", user_id="u1", type_="interested")

    assert sorted(result.interested_ids) == ["a1", "a2"]
    assert svc.interested_ids(store, "u2") == []


def test_unknown_type_is_rejected(store):
    store.add_action(make_action())
    with pytest.raises(ValidationFailed):
        InteractionService().toggle(store, action_id="act-1", user_id="u1", type_="liked")
    assert store.list_interactions() == []


def test_missing_action_is_checked_first(store):
    with pytest.raises(NotFound):
        InteractionService().toggle(store, action_id="nope", user_id="u1", type_="liked")


def test_summaries_only_list_actions_with_interactions(store):
    store.add_action(make_action("a1"))
    store.add_action(make_action("a2"))
    InteractionService().toggle(store, action_id="a2", user_id="u1", type_="support")

    summaries = InteractionService().summaries(store)
    assert set(summaries) == {"a2"}
    assert summaries["a2"]["support"] == 1
