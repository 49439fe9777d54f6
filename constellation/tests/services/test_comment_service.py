import pytest

from constellation.core.errors import Forbidden, NotFound, ValidationFailed
from constellation.models import UserRole
from constellation.policies.comment_policy import anyone_may_reply
from constellation.services.comment_service import CommentService
from constellation.tests.factories import make_action, make_principal


@pytest.fixture
def action_store(store):
    store.add_action(make_action(owner_id="owner-1"))
    return store


def test_comment_snapshots_author(action_store):
    p = make_principal("u1", name="Ming")
    comment = CommentService().add_comment(action_store, action_id="act-1", principal=p, text=" hi ")

    assert comment.author == "Ming"
    assert comment.text == "hi"
    assert comment.replies == []
    assert action_store.get_action("act-1").comments[0].id == comment.id


def test_comment_needs_text_or_image(action_store):
    with pytest.raises(ValidationFailed):
        CommentService().add_comment(
            action_store, action_id="act-1", principal=make_principal(), text="  ", image_url=None
        )


def test_comment_accepts_image_only(action_store):
    comment = CommentService().add_comment(
        action_store,
        action_id="act-1",
        principal=make_principal(),
        text=None,
        image_url="https://img.example.com/a.png",
    )
    assert comment.image_url == "https://img.example.com/a.png"


def test_comment_rejects_non_http_image(action_store):
    with pytest.raises(ValidationFailed):
        CommentService().add_comment(
            action_store,
            action_id="act-1",
            principal=make_principal(),
            text="look",
            image_url="javascript:alert(1)",
        )


def test_comment_on_missing_action(store):
    with pytest.raises(NotFound):
        CommentService().add_comment(store, action_id="x", principal=make_principal(), text="hi")


def test_owner_reply_nests_under_parent(action_store):
    svc = CommentService()
    parent = svc.add_comment(action_store, action_id="act-1", principal=make_principal("u1"), text="q?")

    reply = svc.add_reply(
        action_store, parent_comment_id=parent.id, principal=make_principal("owner-1"), text="a!"
    )

    comments = action_store.get_action("act-1").comments
    assert len(comments) == 1
    assert comments[0].replies[0].id == reply.id
    assert reply.parent_id == parent.id


def test_admin_may_reply(action_store):
    svc = CommentService()
    parent = svc.add_comment(action_store, action_id="act-1", principal=make_principal("u1"), text="q?")
    admin = make_principal("root", role=UserRole.admin)
    assert svc.add_reply(action_store, parent_comment_id=parent.id, principal=admin, text="ok")


def test_non_owner_reply_forbidden_by_default(action_store):
    svc = CommentService()
    parent = svc.add_comment(action_store, action_id="act-1", principal=make_principal("u1"), text="q?")

    with pytest.raises(Forbidden):
        svc.add_reply(action_store, parent_comment_id=parent.id, principal=make_principal("u2"), text="me too")
    assert action_store.get_action("act-1").comments[0].replies == []


def test_open_reply_policy(action_store):
    svc = CommentService(reply_policy=anyone_may_reply)
    parent = svc.add_comment(action_store, action_id="act-1", principal=make_principal("u1"), text="q?")
    reply = svc.add_reply(action_store, parent_comment_id=parent.id, principal=make_principal("u2"), text="+1")
    assert reply.parent_id == parent.id


def test_reply_to_a_reply_is_not_found(action_store):
    svc = CommentService(reply_policy=anyone_may_reply)
    parent = svc.add_comment(action_store, action_id="act-1", principal=make_principal("u1"), text="q?")
    reply = svc.add_reply(action_store, parent_comment_id=parent.id, principal=make_principal("u2"), text="+1")

    with pytest.raises(NotFound):
        svc.add_reply(action_store, parent_comment_id=reply.id, principal=make_principal("u3"), text="deep")
