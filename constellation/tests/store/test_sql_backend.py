from constellation.models import Interaction, InteractionType, Participation
from constellation.store.memory import InMemoryStore
from constellation.store.snapshot import Snapshot
from constellation.store.sql_backend import SqlBackend
from constellation.tests.factories import make_action


def _url(tmp_path):
    return f"sqlite:///{tmp_path / 'db' / 'store.db'}"


def test_empty_database_loads_nothing(tmp_path):
    assert SqlBackend(_url(tmp_path)).load() is None


def test_round_trip_keeps_order_and_records(tmp_path):
    snapshot = Snapshot(
        actions=[make_action("newest"), make_action("older")],
        participations=[
            Participation(
                id="p1",
                action_id="older",
                user_id="u1",
                motivation="m",
                resource_description="r",
                phone="0911",
                point_index=0,
            )
        ],
        interactions=[
            Interaction(id="i1", action_id="older", user_id="u1", type=InteractionType.interested)
        ],
    )
    SqlBackend(_url(tmp_path)).save(snapshot)

    loaded = SqlBackend(_url(tmp_path)).load()

    assert [a.id for a in loaded.actions] == ["newest", "older"]
    assert loaded.participations[0].phone == "0911"
    assert loaded.interactions[0].type == InteractionType.interested


def test_save_replaces_previous_rows(tmp_path):
    backend = SqlBackend(_url(tmp_path))
    store = InMemoryStore(Snapshot(actions=[make_action("a1")]), backend)
    with store.transaction():
        store.add_action(make_action("a2"))
    with store.transaction():
        store.get_action("a1").name = "renamed"

    loaded = backend.load()
    assert [a.id for a in loaded.actions] == ["a2", "a1"]
    assert loaded.actions[1].name == "renamed"
