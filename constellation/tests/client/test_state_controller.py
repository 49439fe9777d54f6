import pytest

from constellation.client.api import ApiClient, ApiError
from constellation.client.state import RECOMMEND_DEGRADED_STATUS, ClientStateController
from constellation.tests.factories import action_payload

JOIN_FORM = {
    "motivation": "Happy to help",
    "selectedTags": ["Sampler"],
    "resourceDescription": "A car",
    "phone": "0912000111",
}


class OfflineRecommendApi(ApiClient):
    def recommend(self, query, interested_ids, *, timeout=None):
        raise ApiError(0, "Network error, please try again.", network=True)


class BrokenInteractApi(ApiClient):
    def interact(self, action_id, type_):
        raise ApiError(500, "Internal server error")


@pytest.fixture
def controller(client):
    ctl = ClientStateController(ApiClient(http=client))
    ctl.bootstrap()
    return ctl


def test_login_logout_cycle(controller):
    controller.register("Mei", "mei@example.com", "secret123")
    assert controller.state.user["name"] == "Mei"
    assert controller.state.token

    controller.navigate("participated")
    controller.logout()

    assert controller.state.user is None
    assert controller.state.page == "home"
    assert controller.state.interested_ids == []


def test_bad_login_leaves_state_untouched(controller):
    with pytest.raises(ApiError) as err:
        controller.login("ghost@example.com", "whatever1")
    assert err.value.status_code == 401
    assert controller.state.user is None


def test_create_prepends_and_update_merges(controller):
    controller.register("Mei", "mei@example.com", "secret123")
    first = controller.create(action_payload(name="First"))
    second = controller.create(action_payload(name="Second", category="Education"))

    assert [a["id"] for a in controller.state.actions] == [second["id"], first["id"]]
    assert [a["id"] for a in controller.mine] == [second["id"], first["id"]]

    controller.set_category("Education")
    assert [a["id"] for a in controller.visible] == [second["id"]]
    assert controller.categories == ["All", "Education", "Environment"]

    controller.update(first["id"], {"summary": "Changed"})
    assert controller._find(first["id"])["summary"] == "Changed"


def test_join_merges_server_slot(controller, client):
    owner = ClientStateController(ApiClient(http=client))
    owner.register("Owner", "owner@example.com", "secret123")
    action = owner.create(action_payload())

    controller.refresh()
    controller.register("Mei", "mei@example.com", "secret123")
    result = controller.join(action["id"], JOIN_FORM)

    assert result["pointIndex"] == 0
    assert [a["id"] for a in controller.participated] == [action["id"]]

    with pytest.raises(ApiError) as err:
        controller.join(action["id"], JOIN_FORM)
    assert err.value.is_conflict
    assert len(controller._find(action["id"])["participants"]) == 1


def test_interested_toggle_reconciles(controller):
    controller.register("Mei", "mei@example.com", "secret123")
    action = controller.create(action_payload())

    controller.toggle_interaction(action["id"], "interested")
    assert controller.state.interested_ids == [action["id"]]
    assert [a["id"] for a in controller.interested] == [action["id"]]
    assert controller._find(action["id"])["interactions"]["interested"] == 1

    controller.toggle_interaction(action["id"], "interested")
    assert controller.state.interested_ids == []


def test_interested_toggle_reverts_on_failure(client):
    ctl = ClientStateController(BrokenInteractApi(http=client))
    ctl.register("Mei", "mei@example.com", "secret123")
    action = ctl.create(action_payload())

    with pytest.raises(ApiError):
        ctl.toggle_interaction(action["id"], "interested")
    assert ctl.state.interested_ids == []


def test_comment_and_reply_are_merged(controller, client):
    controller.register("Mei", "mei@example.com", "secret123")
    action = controller.create(action_payload())
    comment = controller.comment(action["id"], "First!")
    controller.reply(comment["id"], "Thanks")

    local = controller._find(action["id"])["comments"]
    assert local[0]["id"] == comment["id"]
    assert local[0]["replies"][0]["text"] == "Thanks"


def test_recommend_uses_server_ranking(controller):
    controller.register("Mei", "mei@example.com", "secret123")
    action = controller.create(action_payload())

    assert controller.recommend("river") == [action["id"]]
    assert controller.state.status_text is None


def test_recommend_degrades_locally(client):
    ctl = ClientStateController(OfflineRecommendApi(http=client))
    ctl.register("Mei", "mei@example.com", "secret123")
    action = ctl.create(action_payload())

    assert ctl.recommend("river") == [action["id"]]
    assert ctl.state.status_text == RECOMMEND_DEGRADED_STATUS


def test_open_and_close_action(controller):
    controller.register("Mei", "mei@example.com", "secret123")
    action = controller.create(action_payload())

    controller.open_action(action["id"])
    assert controller.selected["id"] == action["id"]
    controller.close_action()
    assert controller.selected is None
